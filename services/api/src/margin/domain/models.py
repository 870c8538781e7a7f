from dataclasses import dataclass

from services.api.src.margin.domain.fixed_point import div, mul


@dataclass(frozen=True)
class InterestConfig:
    # All values scaled by FLOAT_SCALAR
    base_rate: int
    base_slope: int
    excess_slope: int
    optimal_utilization: int

    def borrow_rate(self, utilization: int) -> int:
        """Compute the scaled borrow APR at a scaled utilization (kinked curve)."""
        if utilization < self.optimal_utilization:
            return self.base_rate + mul(utilization, self.base_slope)
        return (
            self.base_rate
            + mul(self.optimal_utilization, self.base_slope)
            + mul(utilization - self.optimal_utilization, self.excess_slope)
        )


@dataclass(frozen=True)
class PoolConfig:
    # Rates scaled by FLOAT_SCALAR, amounts in the coin's smallest unit
    max_utilization_rate: int
    min_borrow: int
    protocol_spread: int
    supply_cap: int


@dataclass(frozen=True)
class PoolState:
    total_supply: int
    total_borrow: int

    @property
    def utilization(self) -> int:
        """Scaled total_borrow / total_supply; an empty pool is 0% utilized."""
        if self.total_supply == 0:
            return 0
        return div(self.total_borrow, self.total_supply)


@dataclass(frozen=True)
class InterestCurve:
    """Normalized curve outputs (1.0 == 100%)."""

    high_kink: float
    base_borrow_apr: float
    borrow_apr_on_high_kink: float
    max_borrow_apr: float
    utilization_rate: float
    supply_apr: float


@dataclass(frozen=True)
class MarginPoolParameters:
    """Decoded parameters for one margin pool, in human units."""

    # Asset metadata
    coin: str
    address: str
    type: str
    scalar: int
    decimals: int

    # Pool reads (amounts in whole coins, rates as fractions)
    supply_cap: float = 0.0
    max_utilization_rate: float = 0.0
    protocol_spread: float = 0.0
    min_borrow: float = 0.0
    interest_rate: float = 0.0
    total_supply: float = 0.0
    supply_shares: float = 0.0
    total_borrow: float = 0.0
    borrow_shares: float = 0.0
    last_update_timestamp: int = 0  # unix ms, not rescaled

    # Supplier cap reads
    user_supply_shares: float = 0.0
    user_supply_amount: float = 0.0

    # Interest curve
    high_kink: float = 0.0
    base_borrow_apr: float = 0.0
    borrow_apr_on_high_kink: float = 0.0
    max_borrow_apr: float = 0.0
    utilization_rate: float = 0.0
    supply_apr: float = 0.0


@dataclass(frozen=True)
class MarginBalance:
    coin: str
    user_supply_amount: float
    wallet_balance: float
