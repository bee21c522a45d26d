"""
Test suite for currency module

Tests Money creation and rounding.
All monetary values must use Decimal precision.
"""

import pytest
from decimal import Decimal

from unified_payments.currency import Money, Currency


class TestMoney:
    """Test Money class operations"""
    
    def test_money_creation(self):
        """Test Money object creation and validation"""
        money = Money(Decimal('100.50'), Currency.USD)
        assert money.amount == Decimal('100.50')
        assert money.currency == Currency.USD
        
        # Test automatic rounding to currency precision
        money_rounded = Money(Decimal('100.555'), Currency.USD)
        assert money_rounded.amount == Decimal('100.56')
        
        money_down = Money(Decimal('100.554'), Currency.USD)
        assert money_down.amount == Decimal('100.55')
    
    def test_non_decimal_amounts_converted(self):
        """Test that strings and ints become Decimal"""
        assert Money('42.1', Currency.USD).amount == Decimal('42.10')
        assert Money(7, Currency.USD).amount == Decimal('7.00')
    
    def test_is_positive(self):
        assert Money(Decimal('0.01'), Currency.USD).is_positive()
        assert not Money(Decimal('0'), Currency.USD).is_positive()
        assert not Money(Decimal('-5'), Currency.USD).is_positive()
    
    def test_money_is_immutable(self):
        money = Money(Decimal('10'), Currency.USD)
        with pytest.raises(AttributeError):
            money.amount = Decimal('20')


class TestCurrency:
    """Test currency metadata"""
    
    def test_currency_codes(self):
        assert Currency.USD.code == "USD"
        assert Currency.USD.precision == 2
        assert Currency["USD"] is Currency.USD
