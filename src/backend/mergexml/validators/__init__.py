"""Document validators run before a merge."""

from .currency_code import check_currency_code, CurrencyCodeValidator

__all__ = [
    "check_currency_code",
    "CurrencyCodeValidator"
]
