"""Realtime Application Layer - 연결 레지스트리, 브로드캐스트, 세션."""
