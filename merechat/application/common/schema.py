"""공용 Pydantic 스키마 베이스."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase JSON 필드를 사용하는 스키마 베이스.

    파이썬 쪽은 snake_case 이름으로 생성 가능.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
