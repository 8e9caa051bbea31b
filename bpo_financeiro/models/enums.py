from enum import Enum

from sqlalchemy import Column, Enum as SAEnum

class TransactionType(str, Enum):
    income = "entrada"
    expense = "saida"

class PaymentMethod(str, Enum):
    lump_sum = "a_vista"
    installment = "parcelado"

class TransactionStatus(str, Enum):
    pending = "pendente"
    paid = "pago"
    overdue = "vencido"

class PatternKind(str, Enum):
    description = "description"
    category = "category"

class DateField(str, Enum):
    due_date = "due_date"
    created_at = "created_at"


def enum_column(enum_cls, **kwargs) -> Column:
    """Coluna que grava o valor do enum ("entrada"), não o nome do membro."""
    return Column(
        SAEnum(
            enum_cls,
            values_callable=lambda members: [m.value for m in members],
            native_enum=False,
            validate_strings=True,
            length=20,
        ),
        nullable=kwargs.pop("nullable", False),
        **kwargs,
    )
