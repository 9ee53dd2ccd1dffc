"""Currency conversion and currency domain service.

All stored amounts are integers in the minor unit of the default currency.
Conversion is for display only and never changes stored amounts.
"""

import logging
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from tillbook.database.base import Database
from tillbook.domain import errors
from tillbook.domain.entities import Currency
from tillbook.domain.errors import ConflictError, UnknownCurrencyError, ValidationError

logger = logging.getLogger(__name__)

# Exchange rates are stored as integers scaled by this factor
SCALE = 10000

MAX_DECIMALS = 4

_CODE_PATTERN = re.compile(r"^[A-Z]{3,5}$")


def _find(code: str, currencies: Iterable[Currency]) -> Currency:
    for currency in currencies:
        if currency.code == code:
            return currency
    raise UnknownCurrencyError(errors.unknown_currency(code))


def convert(amount: int, from_code: str, to_code: str, currencies: Iterable[Currency]) -> int:
    """Convert a minor-unit amount between two registered currencies.

    The amount is bridged through the default currency and rounded once,
    half away from zero, at the end.

    Args:
        amount: Amount in minor units of ``from_code``
        from_code: Source currency code
        to_code: Target currency code
        currencies: Registered currencies

    Returns:
        Amount in minor units of ``to_code``

    Raises:
        UnknownCurrencyError: If either code is not registered
    """
    currencies = list(currencies)
    if from_code == to_code:
        # Still reject codes nobody registered
        _find(from_code, currencies)
        return amount

    source = _find(from_code, currencies)
    target = _find(to_code, currencies)

    # amount * SCALE / source_rate * target_rate / SCALE, as one exact division
    numerator = Decimal(amount * SCALE * target.exchange_rate)
    denominator = Decimal(source.exchange_rate * SCALE)
    return int((numerator / denominator).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_amount(amount: int, currency: Optional[Currency] = None) -> str:
    """Render a minor-unit amount as major units with the currency symbol.

    Without a currency, amounts are shown as dollars with two decimals.
    """
    symbol = currency.symbol if currency is not None else "$"
    decimals = currency.decimals if currency is not None else 2
    major = Decimal(amount).scaleb(-decimals)
    sign = "-" if major < 0 else ""
    return f"{sign}{symbol}{abs(major):,.{decimals}f}"


class CurrencyService:
    """Service for managing currencies and converting amounts."""

    def __init__(self, db: Database):
        """Initialize currency service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_currency(
        self,
        code: str,
        name: str,
        symbol: str,
        exchange_rate: int = SCALE,
        decimals: int = 2,
        is_default: bool = False,
    ) -> int:
        """Register a currency.

        The first registered currency always becomes the default.

        Args:
            code: ISO-like currency code, e.g. "USD"
            name: Display name
            symbol: Display symbol
            exchange_rate: Rate against the default currency, scaled by 10,000
            decimals: Number of minor-unit digits (0-4)
            is_default: Make this the default currency

        Returns:
            Currency ID

        Raises:
            ValidationError: If a field is invalid
            ConflictError: If the code is already registered
        """
        code = code.strip().upper()
        if not _CODE_PATTERN.match(code):
            raise ValidationError(f"Invalid currency code '{code}'")
        if not 0 <= decimals <= MAX_DECIMALS:
            raise ValidationError(f"Decimals must be between 0 and {MAX_DECIMALS}")
        if exchange_rate <= 0:
            raise ValidationError("Exchange rate must be positive")
        if self.db.get_currency_by_code(code) is not None:
            raise ConflictError(f"Currency '{code}' already exists")

        if not self.db.list_currencies():
            is_default = True

        currency_id = self.db.create_currency(
            code=code,
            name=name,
            symbol=symbol,
            exchange_rate=exchange_rate,
            decimals=decimals,
        )
        if is_default:
            self.set_default_currency(code)
        return currency_id

    def get_currency(self, code: str) -> Optional[Currency]:
        """Get currency by code."""
        return self.db.get_currency_by_code(code.upper())

    def list_currencies(self) -> list[Currency]:
        """List all currencies."""
        return self.db.list_currencies()

    def get_default_currency(self) -> Optional[Currency]:
        """Get the default currency, or None if none is registered."""
        return self.db.get_default_currency()

    def set_default_currency(self, code: str) -> None:
        """Make a currency the default, clearing the flag on all others.

        Raises:
            UnknownCurrencyError: If the code is not registered
        """
        code = code.upper()
        if self.db.get_currency_by_code(code) is None:
            raise UnknownCurrencyError(errors.unknown_currency(code))
        self.db.set_default_currency(code)
        logger.info("Default currency set to %s", code)

    def update_exchange_rate(self, code: str, exchange_rate: int) -> None:
        """Update the exchange rate of a currency.

        Raises:
            UnknownCurrencyError: If the code is not registered
            ValidationError: If the rate is not positive
        """
        code = code.upper()
        if exchange_rate <= 0:
            raise ValidationError("Exchange rate must be positive")
        if self.db.get_currency_by_code(code) is None:
            raise UnknownCurrencyError(errors.unknown_currency(code))
        self.db.update_exchange_rate(code, exchange_rate)

    def convert(self, amount: int, from_code: str, to_code: str) -> int:
        """Convert an amount between two registered currencies."""
        return convert(amount, from_code.upper(), to_code.upper(), self.db.list_currencies())
