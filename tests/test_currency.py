"""Tests for currency conversion and the currency service."""

import pytest

from tillbook.domain.currency import convert, format_amount
from tillbook.domain.entities import Currency
from tillbook.domain.errors import ConflictError, UnknownCurrencyError, ValidationError

USD = Currency(id=1, code="USD", name="US Dollar", symbol="$", exchange_rate=10000, decimals=2, is_default=True)
EUR = Currency(id=2, code="EUR", name="Euro", symbol="€", exchange_rate=9200, decimals=2, is_default=False)
GBP = Currency(id=3, code="GBP", name="Pound", symbol="£", exchange_rate=7900, decimals=2, is_default=False)
JPY = Currency(id=4, code="JPY", name="Yen", symbol="¥", exchange_rate=1500000, decimals=0, is_default=False)
CURRENCIES = [USD, EUR, GBP, JPY]


class TestConvert:
    """Tests for the pure conversion function."""

    def test_default_to_other(self):
        """100.00 USD at 0.92 is 92.00 EUR."""
        assert convert(10000, "USD", "EUR", CURRENCIES) == 9200

    def test_other_to_default(self):
        assert convert(9200, "EUR", "USD", CURRENCIES) == 10000

    def test_same_currency_is_identity(self):
        for amount in (0, 1, 12345, -987):
            assert convert(amount, "EUR", "EUR", CURRENCIES) == amount

    def test_cross_rate_rounds_once(self):
        """EUR to GBP goes through the default currency without double rounding."""
        # 1000 * 7900 / 9200 = 858.695...
        assert convert(1000, "EUR", "GBP", CURRENCIES) == 859

    def test_round_half_away_from_zero(self):
        half_rate = [USD, Currency(id=9, code="HALF", name="Half", symbol="h", exchange_rate=5000, decimals=2, is_default=False)]
        assert convert(1, "USD", "HALF", half_rate) == 1
        assert convert(-1, "USD", "HALF", half_rate) == -1
        assert convert(3, "USD", "HALF", half_rate) == 2

    @pytest.mark.parametrize("rate", [3334, 7900, 9200, 10000, 1500000])
    def test_round_trip_within_one_unit(self, rate):
        """A trip out of the default currency and back is off by at most one unit.

        Each leg rounds by at most half a unit, and the return leg scales the
        first error by 10000 / rate, so the bound holds for rates above 3333.
        """
        other = Currency(id=9, code="OTH", name="Other", symbol="o", exchange_rate=rate, decimals=2, is_default=False)
        currencies = [USD, other]
        for amount in list(range(-50, 2000)) + [10001, 123457, 98765431]:
            back = convert(convert(amount, "USD", "OTH", currencies), "OTH", "USD", currencies)
            assert abs(back - amount) <= 1

    def test_round_trip_through_low_rate_loses_precision(self):
        """At rate 100 one unit of the other currency is worth 100 default units."""
        low = Currency(id=9, code="LOW", name="Low", symbol="l", exchange_rate=100, decimals=0, is_default=False)
        currencies = [USD, low]
        assert convert(150, "USD", "LOW", currencies) == 2
        assert convert(2, "LOW", "USD", currencies) == 200

    @pytest.mark.parametrize("source,target", [("XXX", "USD"), ("USD", "XXX"), ("XXX", "XXX")])
    def test_unknown_code_raises(self, source, target):
        with pytest.raises(UnknownCurrencyError):
            convert(100, source, target, CURRENCIES)


class TestFormatAmount:
    """Tests for rendering amounts."""

    def test_default_formatting(self):
        assert format_amount(123456) == "$1,234.56"
        assert format_amount(-500) == "-$5.00"
        assert format_amount(0) == "$0.00"

    def test_currency_symbol_and_decimals(self):
        assert format_amount(9200, EUR) == "€92.00"
        assert format_amount(1500, JPY) == "¥1,500"


class TestCurrencyService:
    """Tests for CurrencyService."""

    def test_first_currency_becomes_default(self, currency_service):
        currency_service.create_currency(code="usd", name="US Dollar", symbol="$")
        default = currency_service.get_default_currency()
        assert default is not None
        assert default.code == "USD"
        assert default.exchange_rate == 10000

    def test_no_default_without_currencies(self, currency_service):
        assert currency_service.get_default_currency() is None

    def test_set_default_clears_others(self, currency_service, sample_currencies):
        currency_service.set_default_currency("EUR")
        defaults = [c.code for c in currency_service.list_currencies() if c.is_default]
        assert defaults == ["EUR"]

    def test_create_as_default(self, currency_service, sample_currencies):
        currency_service.create_currency(code="GBP", name="Pound", symbol="£", exchange_rate=7900, is_default=True)
        assert currency_service.get_default_currency().code == "GBP"
        assert not currency_service.get_currency("USD").is_default

    def test_duplicate_code_raises(self, currency_service, sample_currencies):
        with pytest.raises(ConflictError):
            currency_service.create_currency(code="EUR", name="Euro", symbol="€")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"code": "US", "name": "x", "symbol": "x"},
            {"code": "U1D", "name": "x", "symbol": "x"},
            {"code": "ABC", "name": "x", "symbol": "x", "exchange_rate": 0},
            {"code": "ABC", "name": "x", "symbol": "x", "decimals": 5},
            {"code": "ABC", "name": "x", "symbol": "x", "decimals": -1},
        ],
    )
    def test_invalid_fields_raise(self, currency_service, kwargs):
        with pytest.raises(ValidationError):
            currency_service.create_currency(**kwargs)

    def test_update_rate_changes_conversion(self, currency_service, sample_currencies):
        currency_service.update_exchange_rate("EUR", 9500)
        assert currency_service.convert(10000, "USD", "EUR") == 9500

    def test_update_rate_of_unknown_currency(self, currency_service, sample_currencies):
        with pytest.raises(UnknownCurrencyError):
            currency_service.update_exchange_rate("GBP", 7900)

    def test_set_default_unknown_currency(self, currency_service, sample_currencies):
        with pytest.raises(UnknownCurrencyError):
            currency_service.set_default_currency("CHF")

    def test_service_convert(self, currency_service, sample_currencies):
        assert currency_service.convert(10000, "usd", "eur") == 9200
