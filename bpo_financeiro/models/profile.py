from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Profile(SQLModel, table=True):
    __tablename__ = "profiles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    cnpj: str = Field(index=True, unique=True)  # somente dígitos
    company_name: str
    password_hash: Optional[str] = None  # md5 legado ou bcrypt ($2a$/$2b$)
    user_id: Optional[UUID] = Field(
        default=None,
        foreign_key="auth_user.id",
        unique=True,
        index=True,
        ondelete="CASCADE",
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
