import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from babel.numbers import format_currency as babel_format_currency

CENTS = Decimal("0.01")


def parse_currency_input(value: Union[str, int, float, Decimal]) -> Decimal:
    """Aceita "1.234,56", "R$ 10,00" ou números; o que não for número vira 0."""
    if isinstance(value, Decimal):
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    if isinstance(value, (int, float)):
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)

    text = str(value).strip()
    if "," in text:
        # Formato pt-BR: ponto é separador de milhar
        text = re.sub(r"[^\d,]", "", text).replace(",", ".", 1)
    else:
        text = re.sub(r"[^\d.]", "", text)
    try:
        return Decimal(text).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return Decimal("0.00")


def format_currency(value: Union[Decimal, int, float]) -> str:
    """Formato BRL do locale pt_BR; entre "R$" e o número vai um espaço não separável."""
    amount = Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    return babel_format_currency(amount, "BRL", locale="pt_BR")
