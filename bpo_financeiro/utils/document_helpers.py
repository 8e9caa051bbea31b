import re

from bpo_financeiro.core.config import DERIVED_EMAIL_DOMAIN
from bpo_financeiro.core.exceptions import ValidationError

CPF_LENGTH = 11
CNPJ_LENGTH = 14

_NON_DIGITS = re.compile(r"\D")


def only_digits(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def is_valid_document(value: str) -> bool:
    """CPF tem 11 dígitos, CNPJ tem 14. Não confere dígitos verificadores."""
    return len(only_digits(value)) in (CPF_LENGTH, CNPJ_LENGTH)


def normalize_document(value: str) -> str:
    digits = only_digits(value)
    if len(digits) not in (CPF_LENGTH, CNPJ_LENGTH):
        raise ValidationError("Por favor, insira um CPF ou CNPJ válido")
    return digits


def format_document(value: str) -> str:
    """000.000.000-00 para CPF, 00.000.000/0000-00 para CNPJ."""
    digits = only_digits(value)
    if len(digits) == CPF_LENGTH:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"
    if len(digits) == CNPJ_LENGTH:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"
    return digits


def derived_email(cnpj: str) -> str:
    return f"{only_digits(cnpj)}@{DERIVED_EMAIL_DOMAIN}"
