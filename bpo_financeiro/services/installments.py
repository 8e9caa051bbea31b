import calendar
from datetime import date, timedelta
from typing import List
from uuid import UUID

from bpo_financeiro.models.enums import PaymentMethod, TransactionStatus
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.schemas.transaction import TransactionCreate


def add_months(start: date, months: int) -> date:
    """Soma meses de calendário mantendo o dia.

    Se o dia não existe no mês de destino o excedente passa para o mês
    seguinte: 31/01 + 1 mês = 03/03 (ano comum), 31/01 + 1 mês = 02/03 (bissexto).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    if start.day <= last_day:
        return date(year, month, start.day)
    return date(year, month, last_day) + timedelta(days=start.day - last_day)


def installment_count(data: TransactionCreate) -> int:
    if data.payment_method == PaymentMethod.installment:
        return data.installments
    return 1


def expand_installments(data: TransactionCreate, owner_id: UUID) -> List[Transaction]:
    """Um lançamento vira N linhas, uma por parcela, com vencimentos mensais."""
    count = installment_count(data)

    if count <= 1:
        return [
            Transaction(
                user_id=owner_id,
                type=data.type,
                description=data.description,
                amount=data.amount,
                payment_method=data.payment_method,
                installments=1,
                current_installment=1,
                due_date=data.due_date,
                category=data.category,
                status=TransactionStatus.pending,
            )
        ]

    return [
        Transaction(
            user_id=owner_id,
            type=data.type,
            description=data.description,
            amount=data.amount,
            payment_method=data.payment_method,
            installments=count,
            current_installment=index + 1,
            due_date=add_months(data.due_date, index),
            category=data.category,
            status=TransactionStatus.pending,
        )
        for index in range(count)
    ]
