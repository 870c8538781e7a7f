from dataclasses import dataclass
from typing import Iterable

from services.api.src.margin.adapters.deepbook.config import (
    DeepBookMarginConfig,
    MarginPoolConfig,
)
from services.api.src.margin.adapters.deepbook.params import (
    BASE_PARAM_KEYS,
    SUPPLIER_CAP_PARAM_KEYS,
    ParamKey,
    requires_supplier_cap,
)
from services.api.src.margin.adapters.deepbook.transaction import ReadCallBatch


class MissingSupplierCapError(ValueError):
    """Raised when a supplier-cap parameter is requested without a cap ID."""

    def __init__(self, key: ParamKey, coin: str):
        self.key = key
        self.coin = coin
        super().__init__(f"supplier_cap_id is required for '{key.value}' on {coin} margin pool")


@dataclass(frozen=True)
class ParameterBatch:
    batch: ReadCallBatch
    coin: str
    keys: tuple[ParamKey, ...]
    # Command index of the first parameter call within the batch
    offset: int


class MarginPoolContract:
    def __init__(self, config: DeepBookMarginConfig):
        self.config = config

    def _get_pool(self, coin: str) -> MarginPoolConfig:
        pool = self.config.get_margin_pool(coin)
        if not pool:
            raise ValueError(f"Unknown margin pool: {coin}")
        return pool

    def add_param_call(
        self,
        batch: ReadCallBatch,
        key: ParamKey,
        coin: str,
        supplier_cap_id: str | None = None,
    ) -> int:
        """Append the getter call for one parameter and return its command index."""
        pool = self._get_pool(coin)
        arguments = [batch.shared_object(pool.address, pool.initial_shared_version)]

        if requires_supplier_cap(key):
            if supplier_cap_id is None:
                raise MissingSupplierCapError(key, coin)
            arguments.append(batch.pure_id(supplier_cap_id))
            if key is ParamKey.USER_SUPPLY_AMOUNT:
                arguments.append(batch.clock())

        return batch.move_call(
            f"{self.config.margin_package_id}::margin_pool::{key.value}",
            arguments,
            type_arguments=[pool.type],
        )

    def build_parameter_batch(
        self,
        coin: str,
        supplier_cap_id: str | None = None,
        batch: ReadCallBatch | None = None,
        keys: Iterable[ParamKey] | None = None,
    ) -> ParameterBatch:
        """Append one getter call per parameter key, in registry order.

        Args:
            coin: Margin pool coin key (e.g. "SUI")
            supplier_cap_id: SupplierCap object ID; adds the supplier-cap keys
            batch: Existing batch to extend (a new one is created if omitted)
            keys: Explicit ordered subset of keys to request

        Raises:
            MissingSupplierCapError: If a supplier-cap key is requested without
                a cap ID. Raised before the batch is modified.
            ValueError: If no margin pool is configured for the coin.
        """
        if keys is None:
            keys = BASE_PARAM_KEYS
            if supplier_cap_id is not None:
                keys = keys + SUPPLIER_CAP_PARAM_KEYS
        keys = tuple(keys)

        for key in keys:
            if requires_supplier_cap(key) and supplier_cap_id is None:
                raise MissingSupplierCapError(key, coin)
        self._get_pool(coin)

        if batch is None:
            batch = ReadCallBatch()
        offset = len(batch)
        for key in keys:
            self.add_param_call(batch, key, coin, supplier_cap_id)

        return ParameterBatch(batch=batch, coin=coin, keys=keys, offset=offset)
