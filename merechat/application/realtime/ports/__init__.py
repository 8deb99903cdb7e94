"""Realtime Ports."""

from .connection import ConnectionPort

__all__ = ["ConnectionPort"]
