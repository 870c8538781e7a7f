from decimal import Decimal
from typing import Any, Sequence

from construct import Construct, ConstructError

from services.api.src.margin.adapters.deepbook.config import CoinConfig
from services.api.src.margin.adapters.deepbook.params import (
    RATE_PARAM_KEYS,
    DecodeType,
    ParamKey,
    decode_type,
)
from services.api.src.margin.domain.fixed_point import FLOAT_SCALAR
from services.api.src.margin.domain.models import (
    InterestConfig,
    InterestCurve,
    MarginPoolParameters,
    PoolConfig,
    PoolState,
)
from services.api.src.margin.utils.bcs import U64

DECODERS: dict[DecodeType, Construct] = {
    DecodeType.U64: U64,
}


class TransformationError(Exception):
    """Raised when required fields are missing or malformed during transformation."""

    def __init__(
        self,
        field: str,
        context: str | None = None,
        reason: str = "Missing required field",
    ):
        self.field = field
        self.context = context
        message = f"{reason}: {field}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


def _get_field(data: dict[str, Any], key: str, required: bool = True, default: Any = None) -> Any:
    """Get a field from dict, optionally raising if missing."""
    if key not in data or data[key] is None:
        if required:
            raise TransformationError(key)
        return default
    return data[key]


def _unwrap(value: Any) -> Any:
    """Strip the {"type": ..., "fields": {...}} wrapper Sui puts around Move structs."""
    if isinstance(value, dict) and isinstance(value.get("fields"), dict):
        return value["fields"]
    return value


def _get_path(data: dict[str, Any], path: str, context: str | None = None) -> Any:
    """Follow a dotted path through nested Move struct fields."""
    current = _unwrap(data)
    for key in path.split("."):
        if not isinstance(current, dict):
            raise TransformationError(path, context, reason="Malformed field")
        try:
            current = _unwrap(_get_field(current, key))
        except TransformationError:
            raise TransformationError(path, context) from None
    return current


def _get_int(data: dict[str, Any], path: str, context: str | None = None) -> int:
    value = _get_path(data, path, context)
    if isinstance(value, bool):
        raise TransformationError(path, context, reason="Malformed field")
    try:
        return int(str(value))
    except ValueError:
        raise TransformationError(path, context, reason="Malformed field") from None


def parse_pool_object(
    pool_object: dict[str, Any],
    context: str | None = None,
) -> tuple[InterestConfig, PoolConfig, PoolState]:
    """Parse a MarginPool object (sui_getObject data) into raw configuration and state.

    Raises:
        TransformationError: If any expected field is missing or not an integer.
    """
    content = pool_object.get("content") if isinstance(pool_object, dict) else None
    if not isinstance(content, dict):
        raise TransformationError("content", context)

    interest = InterestConfig(
        base_rate=_get_int(content, "config.interest_config.base_rate", context),
        base_slope=_get_int(content, "config.interest_config.base_slope", context),
        excess_slope=_get_int(content, "config.interest_config.excess_slope", context),
        optimal_utilization=_get_int(content, "config.interest_config.optimal_utilization", context),
    )

    pool_config = PoolConfig(
        max_utilization_rate=_get_int(content, "config.margin_pool_config.max_utilization_rate", context),
        min_borrow=_get_int(content, "config.margin_pool_config.min_borrow", context),
        protocol_spread=_get_int(content, "config.margin_pool_config.protocol_spread", context),
        supply_cap=_get_int(content, "config.margin_pool_config.supply_cap", context),
    )

    state = PoolState(
        total_supply=_get_int(content, "state.total_supply", context),
        total_borrow=_get_int(content, "state.total_borrow", context),
    )

    return interest, pool_config, state


def decode_return_values(
    return_values: Sequence[bytes | None],
    keys: Sequence[ParamKey],
    context: str | None = None,
) -> dict[ParamKey, str]:
    """Decode dev-inspect return values by position into decimal strings.

    Keys whose return value is absent are left out of the result.

    Raises:
        TransformationError: If a return value is not exactly the width of
            its key's type.
    """
    decoded: dict[ParamKey, str] = {}
    for idx, key in enumerate(keys):
        raw = return_values[idx] if idx < len(return_values) else None
        if raw is None:
            continue
        decoder = DECODERS[decode_type(key)]
        if len(raw) != decoder.sizeof():
            raise TransformationError(
                key.value,
                context,
                reason=f"Malformed return value at position {idx} ({len(raw)} bytes)",
            )
        try:
            decoded[key] = str(decoder.parse(raw))
        except ConstructError as e:
            raise TransformationError(
                key.value, context, reason=f"Malformed return value at position {idx}"
            ) from e
    return decoded


def to_human(raw: str | int, scale: int) -> float:
    """Divide a raw on-chain integer by its scale, exactly, then convert to float."""
    return float(Decimal(str(raw)) / Decimal(scale))


def _format_value(key: ParamKey, raw: str, coin: CoinConfig) -> float | int:
    if key is ParamKey.LAST_UPDATE_TIMESTAMP:
        return int(raw)
    if key in RATE_PARAM_KEYS:
        return to_human(raw, FLOAT_SCALAR)
    return to_human(raw, coin.scalar)


def format_parameters(
    decoded: dict[ParamKey, str],
    coin: CoinConfig,
    curve: InterestCurve,
) -> MarginPoolParameters:
    """Rescale decoded values into human units and merge coin metadata and curve."""
    values = {key.value: _format_value(key, raw, coin) for key, raw in decoded.items()}

    return MarginPoolParameters(
        coin=coin.symbol,
        address=coin.address,
        type=coin.type,
        scalar=coin.scalar,
        decimals=coin.decimals,
        high_kink=curve.high_kink,
        base_borrow_apr=curve.base_borrow_apr,
        borrow_apr_on_high_kink=curve.borrow_apr_on_high_kink,
        max_borrow_apr=curve.max_borrow_apr,
        utilization_rate=curve.utilization_rate,
        supply_apr=curve.supply_apr,
        **values,
    )
