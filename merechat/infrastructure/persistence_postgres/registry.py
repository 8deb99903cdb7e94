"""SQLAlchemy Mapper Registry for Merechat.

모든 매핑 파일에서 이 registry와 metadata를 공유합니다.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import registry

from merechat.infrastructure.persistence_postgres.constants import MERECHAT_SCHEMA

metadata = MetaData(schema=MERECHAT_SCHEMA)
mapper_registry = registry(metadata=metadata)
