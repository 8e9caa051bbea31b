from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime
from sqlmodel import Field, SQLModel

from bpo_financeiro.models.enums import PaymentMethod, TransactionStatus, TransactionType, enum_column


class Transaction(SQLModel, table=True):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("installments >= 1", name="ck_transactions_installments_positive"),
        CheckConstraint(
            "current_installment >= 1 AND current_installment <= installments",
            name="ck_transactions_current_installment_range",
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    # Dono: id da identidade gerenciada (ou id do perfil em sessões legadas)
    user_id: UUID = Field(index=True)
    type: TransactionType = Field(sa_column=enum_column(TransactionType))
    description: str
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    payment_method: PaymentMethod = Field(default=PaymentMethod.lump_sum, sa_column=enum_column(PaymentMethod))
    installments: int = Field(default=1)
    current_installment: int = Field(default=1)
    due_date: date
    category: str
    status: TransactionStatus = Field(default=TransactionStatus.pending, sa_column=enum_column(TransactionStatus))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
