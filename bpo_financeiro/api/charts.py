from datetime import date
from typing import Optional
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, func, select

from bpo_financeiro.core.config import LOCAL_TIMEZONE
from bpo_financeiro.core.exceptions import ValidationError
from bpo_financeiro.core.policies import owned
from bpo_financeiro.core.security import get_current_user
from bpo_financeiro.database import get_session
from bpo_financeiro.models.enums import DateField, TransactionType
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.schemas.summary import ChartFilterOptions, ChartSeries, DefaultRange
from bpo_financeiro.services import chart

router = APIRouter(prefix="/charts", tags=["charts"])


@router.get("/series", response_model=ChartSeries)
def chart_series(
    period: str = Query("30", description="30, 60, 90, 120 ou custom"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    date_field: DateField = Query(DateField.due_date),
    type: Optional[TransactionType] = Query(None),
    category: Optional[str] = Query(None),
    description: Optional[str] = Query(None),
    fill_gaps: bool = Query(False),
    tz: str = Query(LOCAL_TIMEZONE),
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=400, detail="Fuso horário inválido")

    try:
        start, end = chart.resolve_range(period, start_date, end_date)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    filters = chart.ChartFilters(
        start=start,
        end=end,
        date_field=date_field,
        type=type,
        category=category or None,
        description=description or None,
    )
    transactions = session.exec(owned(select(Transaction), Transaction, user_id)).all()
    points = chart.aggregate_daily(transactions, filters, tz=tz, fill_gaps=fill_gaps)
    total_income, total_expense = chart.totals(points)

    return ChartSeries(
        start_date=start,
        end_date=end,
        date_field=date_field.value,
        points=points,
        total_income=total_income,
        total_expense=total_expense,
    )


@router.get("/filters", response_model=ChartFilterOptions)
def chart_filter_options(
    type: Optional[TransactionType] = Query(None),
    category: Optional[str] = Query(None),
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    transactions = session.exec(owned(select(Transaction), Transaction, user_id)).all()
    categories, descriptions = chart.filter_options(transactions, type, category or None)
    return ChartFilterOptions(categories=categories, descriptions=descriptions)


@router.get("/default-range", response_model=DefaultRange)
def default_range(
    user_id: UUID = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    first, last = session.exec(
        owned(select(func.min(Transaction.due_date), func.max(Transaction.due_date)), Transaction, user_id)
    ).one()
    return DefaultRange(start_date=first, end_date=last)
