from pydantic import BaseModel, Field, model_validator


class CoinConfig(BaseModel):
    symbol: str
    address: str
    type: str = Field(..., description="Fully qualified Move coin type")
    scalar: int = Field(..., gt=0, description="Smallest units per whole coin")
    decimals: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_scalar_matches_decimals(self) -> "CoinConfig":
        if self.scalar != 10**self.decimals:
            raise ValueError(
                f"scalar {self.scalar} does not match {self.decimals} decimals for {self.symbol}"
            )
        return self


class MarginPoolConfig(BaseModel):
    coin: str
    address: str = Field(..., description="Shared MarginPool object ID")
    type: str = Field(..., description="Coin type argument of the pool")
    initial_shared_version: int = Field(..., ge=1)


class DeepBookMarginConfig(BaseModel):
    margin_package_id: str
    coins: list[CoinConfig]
    margin_pools: list[MarginPoolConfig]

    def get_coin(self, symbol: str) -> CoinConfig | None:
        for coin in self.coins:
            if coin.symbol == symbol:
                return coin
        return None

    def get_margin_pool(self, coin: str) -> MarginPoolConfig | None:
        for pool in self.margin_pools:
            if pool.coin == coin:
                return pool
        return None

    @property
    def supplier_cap_type(self) -> str:
        return f"{self.margin_package_id}::margin_pool::SupplierCap"


def get_default_config() -> DeepBookMarginConfig:
    """Default configuration for the Sui mainnet SUI and DBUSDC margin pools."""
    return DeepBookMarginConfig(
        margin_package_id="0x97d9473771b01f77b0940c589484184b49f6444627ec121314fae6a6d36fb86b",
        coins=[
            CoinConfig(
                symbol="SUI",
                address="0x0000000000000000000000000000000000000000000000000000000000000002",
                type="0x0000000000000000000000000000000000000000000000000000000000000002::sui::SUI",
                scalar=1_000_000_000,
                decimals=9,
            ),
            CoinConfig(
                symbol="DBUSDC",
                address="0xf7152c05930480cd740d7311b5b8b45c6f488e3a53a11c3f74a6fac36a52e0d7",
                type="0xf7152c05930480cd740d7311b5b8b45c6f488e3a53a11c3f74a6fac36a52e0d7::DBUSDC::DBUSDC",
                scalar=1_000_000,
                decimals=6,
            ),
        ],
        margin_pools=[
            MarginPoolConfig(
                coin="SUI",
                address="0x53041c6f86c4782aabbfc1d4fe234a6d37160310c7ee740c915f0a01b7127344",
                type="0x2::sui::SUI",
                initial_shared_version=658877881,
            ),
            MarginPoolConfig(
                coin="DBUSDC",
                address="0xfd0dc290a120ad6c534507614d4dc0b2e78baab649c35bfacbaec2ce18140b69",
                type="0xf7152c05930480cd740d7311b5b8b45c6f488e3a53a11c3f74a6fac36a52e0d7::DBUSDC::DBUSDC",
                initial_shared_version=658877215,
            ),
        ],
    )
