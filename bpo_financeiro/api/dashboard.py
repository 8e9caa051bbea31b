from uuid import UUID

from fastapi import APIRouter, Depends
from sqlmodel import Session, func, select

from bpo_financeiro.core.policies import owned
from bpo_financeiro.core.security import get_current_user
from bpo_financeiro.database import get_session
from bpo_financeiro.models.enums import TransactionType
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.schemas.summary import DashboardSummary
from bpo_financeiro.utils.currency_helpers import format_currency

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
def financial_summary(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    income = session.exec(
        owned(select(func.sum(Transaction.amount)), Transaction, user_id)
        .where(Transaction.type == TransactionType.income)
    ).one() or 0

    expense = session.exec(
        owned(select(func.sum(Transaction.amount)), Transaction, user_id)
        .where(Transaction.type == TransactionType.expense)
    ).one() or 0

    count = session.exec(
        owned(select(func.count(Transaction.id)), Transaction, user_id)
    ).one() or 0

    balance = income - expense

    return DashboardSummary(
        total_income=income,
        total_expense=expense,
        balance=balance,
        total_income_formatted=format_currency(income),
        total_expense_formatted=format_currency(expense),
        balance_formatted=format_currency(balance),
        transaction_count=count,
    )
