from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from bpo_financeiro.models.enums import PatternKind, TransactionType


class PatternCreate(BaseModel):
    type: TransactionType
    pattern_type: PatternKind
    value: str

    @field_validator("value")
    @classmethod
    def strip_value(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("O padrão não pode ser vazio")
        return value


class PatternRead(BaseModel):
    id: UUID
    type: TransactionType
    pattern_type: PatternKind
    value: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
