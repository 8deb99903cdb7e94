"""ID 파싱 유틸리티."""

from __future__ import annotations

from uuid import UUID

from merechat.application.common.exceptions.validation import InvalidIdError


def parse_id(raw: object, field: str = "id") -> UUID:
    """문자열 ID를 UUID로 변환.

    Raises:
        InvalidIdError: 형식이 잘못된 경우
    """
    if isinstance(raw, UUID):
        return raw
    if not isinstance(raw, str) or not raw:
        raise InvalidIdError(field)
    try:
        return UUID(raw)
    except ValueError:
        raise InvalidIdError(field) from None
