from pydantic import BaseModel, ConfigDict


class MarginPoolParametersResponse(BaseModel):
    """Decoded margin pool parameters in human units."""

    model_config = ConfigDict(from_attributes=True)

    coin: str
    address: str
    type: str
    scalar: int
    decimals: int

    supply_cap: float
    max_utilization_rate: float
    protocol_spread: float
    min_borrow: float
    interest_rate: float
    total_supply: float
    supply_shares: float
    total_borrow: float
    borrow_shares: float
    last_update_timestamp: int

    user_supply_shares: float
    user_supply_amount: float

    high_kink: float
    base_borrow_apr: float
    borrow_apr_on_high_kink: float
    max_borrow_apr: float
    utilization_rate: float
    supply_apr: float


class MarginBalanceResponse(BaseModel):
    """Supplied amount and wallet balance for one coin."""

    model_config = ConfigDict(from_attributes=True)

    coin: str
    user_supply_amount: float
    wallet_balance: float


class MarginPoolSummary(BaseModel):
    """Configured margin pool."""

    coin: str
    pool_address: str
    coin_type: str
    decimals: int


class MarginPoolsResponse(BaseModel):
    margin_package_id: str
    pools: list[MarginPoolSummary]
