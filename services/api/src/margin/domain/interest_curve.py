"""Interest curve derivation for a margin pool."""

from services.api.src.margin.domain.fixed_point import FLOAT_SCALAR, mul, normalize
from services.api.src.margin.domain.models import (
    InterestConfig,
    InterestCurve,
    PoolConfig,
    PoolState,
)


def compute_interest_curve(
    interest: InterestConfig,
    pool_config: PoolConfig,
    state: PoolState,
    current_borrow_rate: int | None = None,
) -> InterestCurve:
    """Derive kink points, current utilization and supply APR.

    Args:
        interest: Raw interest configuration of the pool
        pool_config: Raw margin pool configuration
        state: Raw pool totals
        current_borrow_rate: Scaled borrow APR read from the pool. When None,
            the curve is evaluated at the current utilization instead.

    Returns:
        InterestCurve with every value normalized (1.0 == 100%)
    """
    utilization = state.utilization
    if current_borrow_rate is None:
        current_borrow_rate = interest.borrow_rate(utilization)

    borrow_on_kink = interest.borrow_rate(interest.optimal_utilization)
    max_borrow = interest.borrow_rate(pool_config.max_utilization_rate)

    supply_apr = mul(
        mul(current_borrow_rate, utilization),
        FLOAT_SCALAR - pool_config.protocol_spread,
    )

    return InterestCurve(
        high_kink=normalize(interest.optimal_utilization),
        base_borrow_apr=normalize(interest.base_rate),
        borrow_apr_on_high_kink=normalize(borrow_on_kink),
        max_borrow_apr=normalize(max_borrow),
        utilization_rate=normalize(utilization),
        supply_apr=normalize(supply_apr),
    )
