"""Pagination 파라미터 정규화.

쿼리스트링 값은 관대하게 해석한다: 파싱할 수 없거나 범위를 벗어난 값은
기본값으로 대체한다.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIMIT = 50
DEFAULT_SKIP = 0
MAX_LIMIT = 200
# PostgreSQL OFFSET(bigint) 상한
MAX_SKIP = 2**63 - 1


@dataclass(frozen=True)
class Page:
    limit: int
    skip: int


def _parse_int(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        return None


def normalize_page(
    limit: str | int | None,
    skip: str | int | None,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> Page:
    """limit/skip 정규화.

    - limit: 1 이상이 아니면 default_limit, max_limit 초과는 max_limit
    - skip: 0 이상이 아니면 0, bigint 상한 초과는 MAX_SKIP
    """
    parsed_limit = _parse_int(limit)
    if parsed_limit is None or parsed_limit < 1:
        parsed_limit = default_limit
    parsed_limit = min(parsed_limit, max_limit)

    parsed_skip = _parse_int(skip)
    if parsed_skip is None or parsed_skip < 0:
        parsed_skip = DEFAULT_SKIP
    parsed_skip = min(parsed_skip, MAX_SKIP)

    return Page(limit=parsed_limit, skip=parsed_skip)
