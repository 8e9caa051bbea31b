from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from bpo_financeiro.models.enums import PatternKind, TransactionType, enum_column


class Pattern(SQLModel, table=True):
    __tablename__ = "patterns"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(index=True)
    type: TransactionType = Field(sa_column=enum_column(TransactionType))
    pattern_type: PatternKind = Field(sa_column=enum_column(PatternKind))
    value: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
