import pytest

from services.api.src.margin.domain.interest_curve import compute_interest_curve
from services.api.src.margin.domain.models import InterestConfig, PoolConfig, PoolState


@pytest.fixture
def flat_interest():
    return InterestConfig(
        base_rate=100_000_000,
        base_slope=0,
        excess_slope=0,
        optimal_utilization=800_000_000,
    )


@pytest.fixture
def kinked_interest():
    return InterestConfig(
        base_rate=50_000_000,
        base_slope=100_000_000,
        excess_slope=2_000_000_000,
        optimal_utilization=800_000_000,
    )


def make_pool_config(max_utilization_rate=1_000_000_000, protocol_spread=0) -> PoolConfig:
    return PoolConfig(
        max_utilization_rate=max_utilization_rate,
        min_borrow=0,
        protocol_spread=protocol_spread,
        supply_cap=10**18,
    )


class TestComputeInterestCurve:
    def test_flat_curve_half_utilized(self, flat_interest):
        state = PoolState(total_supply=1_000_000_000, total_borrow=500_000_000)

        curve = compute_interest_curve(flat_interest, make_pool_config(), state)

        assert curve.utilization_rate == 0.5
        assert curve.high_kink == 0.8
        assert curve.base_borrow_apr == 0.1
        assert curve.borrow_apr_on_high_kink == 0.1
        assert curve.max_borrow_apr == 0.1
        assert curve.supply_apr == pytest.approx(0.05)

    def test_empty_pool(self, flat_interest):
        state = PoolState(total_supply=0, total_borrow=0)

        curve = compute_interest_curve(flat_interest, make_pool_config(), state)

        assert curve.utilization_rate == 0.0
        assert curve.supply_apr == 0.0
        assert curve.base_borrow_apr == 0.1

    def test_kink_and_max_rates(self, kinked_interest):
        state = PoolState(total_supply=1_000_000, total_borrow=900_000)
        pool_config = make_pool_config(max_utilization_rate=900_000_000, protocol_spread=100_000_000)

        curve = compute_interest_curve(kinked_interest, pool_config, state)

        assert curve.base_borrow_apr == pytest.approx(0.05)
        assert curve.borrow_apr_on_high_kink == pytest.approx(0.13)
        assert curve.max_borrow_apr == pytest.approx(0.33)
        assert curve.utilization_rate == pytest.approx(0.9)
        # 0.33 * 0.9 * (1 - 0.1)
        assert curve.supply_apr == pytest.approx(0.2673)

    def test_uses_current_borrow_rate_when_given(self, kinked_interest):
        state = PoolState(total_supply=1_000_000, total_borrow=500_000)

        curve = compute_interest_curve(
            kinked_interest,
            make_pool_config(),
            state,
            current_borrow_rate=200_000_000,
        )

        assert curve.supply_apr == pytest.approx(0.1)

    def test_protocol_spread_reduces_supply_apr(self, flat_interest):
        state = PoolState(total_supply=1_000_000_000, total_borrow=500_000_000)

        without_spread = compute_interest_curve(flat_interest, make_pool_config(), state)
        with_spread = compute_interest_curve(
            flat_interest, make_pool_config(protocol_spread=200_000_000), state
        )

        assert with_spread.supply_apr == pytest.approx(without_spread.supply_apr * 0.8)
