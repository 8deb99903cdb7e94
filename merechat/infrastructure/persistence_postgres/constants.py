"""PostgreSQL 스키마/테이블 이름."""

MERECHAT_SCHEMA = "merechat"
CHATS_TABLE = "chats"
MESSAGES_TABLE = "messages"
