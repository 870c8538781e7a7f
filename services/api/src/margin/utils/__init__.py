"""Utility modules."""

from services.api.src.margin.utils.bcs import (
    TransactionKind,
    U64,
    address_bytes,
    normalize_sui_address,
    parse_type_tag,
)

__all__ = [
    "TransactionKind",
    "U64",
    "address_bytes",
    "normalize_sui_address",
    "parse_type_tag",
]
