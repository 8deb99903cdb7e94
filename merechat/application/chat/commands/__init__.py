"""Chat Commands."""

from .edit_message import DeleteMessageCommand, EditMessageCommand
from .mark_read import MarkReadCommand
from .persist_message import PersistMessageCommand
from .send_message import SendMessageCommand
from .start_chat import StartChatCommand
from .upload_attachment import UploadAttachmentCommand

__all__ = [
    "DeleteMessageCommand",
    "EditMessageCommand",
    "MarkReadCommand",
    "PersistMessageCommand",
    "SendMessageCommand",
    "StartChatCommand",
    "UploadAttachmentCommand",
]
