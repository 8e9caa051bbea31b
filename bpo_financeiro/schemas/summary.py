from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class DashboardSummary(BaseModel):
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    total_income_formatted: str
    total_expense_formatted: str
    balance_formatted: str
    transaction_count: int


class DailyPoint(BaseModel):
    date: date
    income: Decimal
    expense: Decimal


class ChartSeries(BaseModel):
    start_date: date
    end_date: date
    date_field: str
    points: List[DailyPoint]
    total_income: Decimal
    total_expense: Decimal


class ChartFilterOptions(BaseModel):
    categories: List[str]
    descriptions: List[str]


class DefaultRange(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
