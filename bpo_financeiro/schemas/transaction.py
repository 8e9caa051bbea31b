from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bpo_financeiro.core.config import MAX_INSTALLMENTS
from bpo_financeiro.models.enums import PaymentMethod, TransactionStatus, TransactionType
from bpo_financeiro.utils.currency_helpers import parse_currency_input


class TransactionCreate(BaseModel):
    type: TransactionType
    description: str = Field(min_length=1)
    amount: Decimal
    payment_method: PaymentMethod = PaymentMethod.lump_sum
    installments: int = Field(default=1, ge=1, le=MAX_INSTALLMENTS)
    due_date: date
    category: str = Field(min_length=1)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        # Aceita o texto do campo monetário ("1.234,56")
        if isinstance(value, str):
            return parse_currency_input(value)
        return value

    @field_validator("description", "category", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def check_amount(self):
        if self.amount <= 0:
            raise ValueError("O valor deve ser maior que zero")
        return self


class TransactionRead(BaseModel):
    id: UUID
    type: TransactionType
    description: str
    amount: Decimal
    payment_method: PaymentMethod
    installments: int
    current_installment: int
    installment_label: str
    due_date: date
    category: str
    status: TransactionStatus  # status efetivo (vencido calculado na leitura)
    stored_status: TransactionStatus
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionStatusUpdate(BaseModel):
    status: TransactionStatus

    @field_validator("status")
    @classmethod
    def not_overdue(cls, value):
        if value == TransactionStatus.overdue:
            raise ValueError("Vencido é calculado pelo vencimento, não pode ser gravado")
        return value


class TransactionCreatedResponse(BaseModel):
    message: str
    items: List[TransactionRead]
