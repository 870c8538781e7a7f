"""Registry of queryable margin pool parameters.

Each ParamKey value is the name of a read-only getter in the margin_pool Move
module. Key order is significant: dev-inspect results are matched back to keys
by position, so the same tuple must drive batch construction and decoding.
"""

from enum import Enum


class ParamKey(str, Enum):
    SUPPLY_CAP = "supply_cap"
    MAX_UTILIZATION_RATE = "max_utilization_rate"
    PROTOCOL_SPREAD = "protocol_spread"
    MIN_BORROW = "min_borrow"
    INTEREST_RATE = "interest_rate"
    TOTAL_SUPPLY = "total_supply"
    SUPPLY_SHARES = "supply_shares"
    TOTAL_BORROW = "total_borrow"
    BORROW_SHARES = "borrow_shares"
    LAST_UPDATE_TIMESTAMP = "last_update_timestamp"
    USER_SUPPLY_SHARES = "user_supply_shares"
    USER_SUPPLY_AMOUNT = "user_supply_amount"


class DecodeType(Enum):
    U64 = "u64"


BASE_PARAM_KEYS: tuple[ParamKey, ...] = (
    ParamKey.SUPPLY_CAP,
    ParamKey.MAX_UTILIZATION_RATE,
    ParamKey.PROTOCOL_SPREAD,
    ParamKey.MIN_BORROW,
    ParamKey.INTEREST_RATE,
    ParamKey.TOTAL_SUPPLY,
    ParamKey.SUPPLY_SHARES,
    ParamKey.TOTAL_BORROW,
    ParamKey.BORROW_SHARES,
    ParamKey.LAST_UPDATE_TIMESTAMP,
)

# Keys that also take a SupplierCap ID argument
SUPPLIER_CAP_PARAM_KEYS: tuple[ParamKey, ...] = (
    ParamKey.USER_SUPPLY_SHARES,
    ParamKey.USER_SUPPLY_AMOUNT,
)

ALL_PARAM_KEYS = BASE_PARAM_KEYS + SUPPLIER_CAP_PARAM_KEYS

PARAM_DECODE_TYPES: dict[ParamKey, DecodeType] = {key: DecodeType.U64 for key in ALL_PARAM_KEYS}

# Values scaled by FLOAT_SCALAR rather than by the coin's scalar
RATE_PARAM_KEYS = frozenset(
    {
        ParamKey.INTEREST_RATE,
        ParamKey.MAX_UTILIZATION_RATE,
        ParamKey.PROTOCOL_SPREAD,
    }
)

_untyped = set(ParamKey) - set(PARAM_DECODE_TYPES)
if _untyped:
    raise RuntimeError(f"Parameter keys without a decode type: {sorted(k.value for k in _untyped)}")


def decode_type(key: ParamKey) -> DecodeType:
    return PARAM_DECODE_TYPES[key]


def requires_supplier_cap(key: ParamKey) -> bool:
    return key in SUPPLIER_CAP_PARAM_KEYS
