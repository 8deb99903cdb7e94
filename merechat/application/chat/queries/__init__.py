"""Chat Queries."""

from .get_chats import GetChatQuery, ListChatsQuery
from .get_messages import GetMessagesQuery, SearchMessagesQuery
from .pagination import Page, normalize_page
from .unread_counts import UnreadCountsQuery

__all__ = [
    "GetChatQuery",
    "GetMessagesQuery",
    "ListChatsQuery",
    "Page",
    "SearchMessagesQuery",
    "UnreadCountsQuery",
    "normalize_page",
]
