"""Merechat - 실시간 채팅 서비스 (REST + WebSocket)."""
