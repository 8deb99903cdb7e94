"""요청자 identity 추출.

identity는 앞단 인증 게이트웨이(ext-authz)가 X-User-ID 헤더로 주입한다.
이 서비스는 헤더를 신뢰한다.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header

from merechat.application.common.exceptions.auth import UnauthorizedError

USER_ID_HEADER = "X-User-ID"


def extract_identity(raw: str | None) -> str | None:
    """헤더 값 정규화. 비어 있으면 None."""
    if raw is None:
        return None
    identity = raw.strip()
    return identity or None


async def get_current_user(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> str:
    identity = extract_identity(x_user_id)
    if identity is None:
        raise UnauthorizedError()
    return identity


CurrentUser = Annotated[str, Depends(get_current_user)]
