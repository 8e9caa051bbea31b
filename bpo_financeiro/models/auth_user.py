from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel


class AuthUser(SQLModel, table=True):
    """Identidade gerenciada: login por e-mail derivado do CNPJ/CPF."""

    __tablename__ = "auth_user"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    encrypted_password: str
    raw_user_meta_data: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
    last_sign_in_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
