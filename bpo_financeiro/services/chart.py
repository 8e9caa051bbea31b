"""Agregação diária de entradas e saídas para o gráfico de linhas.

Tudo aqui é puro: recebe transações já carregadas e devolve a série.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from bpo_financeiro.core.config import LOCAL_TIMEZONE, MAX_CHART_RANGE_DAYS
from bpo_financeiro.core.exceptions import ValidationError
from bpo_financeiro.models.enums import DateField, TransactionType
from bpo_financeiro.models.transaction import Transaction
from bpo_financeiro.schemas.summary import DailyPoint

PERIOD_DAYS = {"30": 30, "60": 60, "90": 90, "120": 120}
CUSTOM_PERIOD = "custom"
ZERO = Decimal("0")


@dataclass(frozen=True)
class ChartFilters:
    start: date
    end: date
    date_field: DateField = DateField.due_date
    type: Optional[TransactionType] = None  # None = ambos
    category: Optional[str] = None  # None = todas
    description: Optional[str] = None


def resolve_range(
    period: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """Período pronto (30/60/90/120 dias até hoje) ou intervalo personalizado."""
    today = today or date.today()
    if period == CUSTOM_PERIOD:
        if not start or not end:
            raise ValidationError("Informe a data inicial e a data final")
        if start > end:
            raise ValidationError("A data inicial deve ser anterior à data final")
        if (end - start).days > MAX_CHART_RANGE_DAYS:
            raise ValidationError(f"O intervalo pode ter no máximo {MAX_CHART_RANGE_DAYS} dias")
        return start, end
    if period not in PERIOD_DAYS:
        raise ValidationError("Período inválido")
    return today - timedelta(days=PERIOD_DAYS[period]), today


def _to_local_day(dt: datetime, tz: str) -> date:
    """Converte um datetime UTC (naive ou com tz) para o dia local."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(ZoneInfo(tz)).date()


def transaction_day(transaction: Transaction, date_field: DateField, tz: str = LOCAL_TIMEZONE) -> Optional[date]:
    if date_field == DateField.due_date:
        return transaction.due_date
    if transaction.created_at is None:
        return None
    return _to_local_day(transaction.created_at, tz)


def _matches(transaction: Transaction, filters: ChartFilters) -> bool:
    if filters.type is not None and transaction.type != filters.type:
        return False
    if filters.category is not None and transaction.category != filters.category:
        return False
    if filters.description is not None and transaction.description != filters.description:
        return False
    return True


def filter_transactions(
    transactions: Iterable[Transaction],
    filters: ChartFilters,
    tz: str = LOCAL_TIMEZONE,
) -> List[Tuple[date, Transaction]]:
    selected = []
    for tx in transactions:
        if not _matches(tx, filters):
            continue
        day = transaction_day(tx, filters.date_field, tz)
        if day is None or not (filters.start <= day <= filters.end):
            continue
        selected.append((day, tx))
    return selected


def aggregate_daily(
    transactions: Iterable[Transaction],
    filters: ChartFilters,
    tz: str = LOCAL_TIMEZONE,
    fill_gaps: bool = False,
) -> List[DailyPoint]:
    """Soma entradas e saídas por dia do campo escolhido, ordenado por data."""
    buckets: Dict[date, Dict[str, Decimal]] = defaultdict(lambda: {"income": ZERO, "expense": ZERO})

    if fill_gaps:
        for offset in range((filters.end - filters.start).days + 1):
            buckets[filters.start + timedelta(days=offset)] = {"income": ZERO, "expense": ZERO}

    for day, tx in filter_transactions(transactions, filters, tz):
        key = "income" if tx.type == TransactionType.income else "expense"
        buckets[day][key] += Decimal(tx.amount)

    return [
        DailyPoint(date=d, income=v["income"], expense=v["expense"])
        for d, v in sorted(buckets.items())
    ]


def totals(points: Iterable[DailyPoint]) -> Tuple[Decimal, Decimal]:
    income = expense = ZERO
    for point in points:
        income += point.income
        expense += point.expense
    return income, expense


def filter_options(
    transactions: Iterable[Transaction],
    type: Optional[TransactionType] = None,
    category: Optional[str] = None,
) -> Tuple[List[str], List[str]]:
    """Opções dependentes: categorias dentro do tipo; descrições dentro do tipo e da categoria."""
    by_type = [t for t in transactions if type is None or t.type == type]
    categories = sorted({t.category for t in by_type if t.category})
    scoped = by_type if category is None else [t for t in by_type if t.category == category]
    descriptions = sorted({t.description for t in scoped if t.description})
    return categories, descriptions
