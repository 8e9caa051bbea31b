from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ProfileRead(BaseModel):
    cnpj: str
    cnpj_formatted: str
    company_name: str
    created_at: datetime
    transaction_count: int
    last_transaction_date: Optional[datetime] = None
    managed_identity: bool


class VerifyPasswordIn(BaseModel):
    password: str


class VerifyPasswordOut(BaseModel):
    valid: bool


class ChangePasswordIn(BaseModel):
    current_password: str
    new_password: str
    confirm_password: Optional[str] = None
