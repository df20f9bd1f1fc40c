"""Tests for the tier rate table."""

from decimal import Decimal

import pytest

from store_credit.engine.rates import RATE_TABLE, coerce_tier, rate_for
from store_credit.exceptions import InvalidArgumentError
from store_credit.models import CustomerTier


class TestRateFor:
    """Tests for rate_for."""

    def test_normal_rate(self) -> None:
        assert rate_for(CustomerTier.NORMAL) == Decimal("0.0149")

    def test_clube_rate(self) -> None:
        assert rate_for(CustomerTier.CLUBE) == Decimal("0.0089")

    def test_vip_rate(self) -> None:
        assert rate_for(CustomerTier.VIP) == Decimal("0.0089")

    @pytest.mark.parametrize("tier", list(CustomerTier))
    def test_total_over_tiers(self, tier: CustomerTier) -> None:
        assert rate_for(tier) in {Decimal("0.0149"), Decimal("0.0089")}

    def test_table_covers_every_tier(self) -> None:
        assert set(RATE_TABLE) == set(CustomerTier)

    def test_accepts_tier_name(self) -> None:
        assert rate_for("VIP") == Decimal("0.0089")

    def test_unknown_tier_fails(self) -> None:
        with pytest.raises(InvalidArgumentError, match="GOLD"):
            rate_for("GOLD")

    def test_lowercase_name_is_not_a_tier(self) -> None:
        with pytest.raises(InvalidArgumentError):
            rate_for("normal")


class TestCoerceTier:
    """Tests for coerce_tier."""

    def test_enum_passthrough(self) -> None:
        assert coerce_tier(CustomerTier.CLUBE) is CustomerTier.CLUBE

    def test_string(self) -> None:
        assert coerce_tier("CLUBE") is CustomerTier.CLUBE

    def test_none_fails(self) -> None:
        with pytest.raises(InvalidArgumentError):
            coerce_tier(None)  # type: ignore[arg-type]
