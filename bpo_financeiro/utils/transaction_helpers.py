from datetime import date
from typing import Optional

from bpo_financeiro.models.enums import PaymentMethod, TransactionStatus
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.schemas.transaction import TransactionRead


def effective_status(transaction: Transaction, today: Optional[date] = None) -> TransactionStatus:
    """Status exibido: pendente com vencimento no passado aparece como vencido.

    Calculado na leitura; o valor gravado não é alterado.
    """
    today = today or date.today()
    # No dia do vencimento ainda é pendente; vencido só a partir do dia seguinte
    if transaction.status == TransactionStatus.pending and transaction.due_date < today:
        return TransactionStatus.overdue
    return transaction.status


def installment_label(transaction: Transaction) -> str:
    if transaction.payment_method == PaymentMethod.installment:
        return f"{transaction.current_installment}/{transaction.installments}x"
    return "À Vista"


def to_transaction_read(transaction: Transaction, today: Optional[date] = None) -> TransactionRead:
    return TransactionRead(
        id=transaction.id,
        type=transaction.type,
        description=transaction.description,
        amount=transaction.amount,
        payment_method=transaction.payment_method,
        installments=transaction.installments,
        current_installment=transaction.current_installment,
        installment_label=installment_label(transaction),
        due_date=transaction.due_date,
        category=transaction.category,
        status=effective_status(transaction, today),
        stored_status=transaction.status,
        created_at=transaction.created_at,
        updated_at=transaction.updated_at,
    )
