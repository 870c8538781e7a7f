"""BCS layouts for the parts of a Sui transaction kind used by read-only batches.

Enum variants are encoded as a ULEB128 tag followed by the variant payload.
"""

from construct import (
    Bytes,
    Flag,
    GreedyBytes,
    Int16ul,
    Int64ul,
    LazyBound,
    PascalString,
    Prefixed,
    PrefixedArray,
    Struct,
    Switch,
    VarInt,
    this,
)

U64 = Int64ul

Address = Bytes(32)
Identifier = PascalString(VarInt, "utf8")

TypeTag = Struct(
    "kind" / VarInt,
    "value" / Switch(
        this.kind,
        {
            6: LazyBound(lambda: TypeTag),
            7: LazyBound(lambda: StructTag),
        },
    ),
)

StructTag = Struct(
    "address" / Address,
    "module" / Identifier,
    "name" / Identifier,
    "type_params" / PrefixedArray(VarInt, TypeTag),
)

SharedObject = Struct(
    "object_id" / Address,
    "initial_shared_version" / Int64ul,
    "mutable" / Flag,
)

ObjectArg = Struct(
    "kind" / VarInt,
    "value" / Switch(this.kind, {1: SharedObject}),
)

CallArg = Struct(
    "kind" / VarInt,
    "value" / Switch(
        this.kind,
        {
            0: Prefixed(VarInt, GreedyBytes),
            1: ObjectArg,
        },
    ),
)

Argument = Struct(
    "kind" / VarInt,
    "value" / Switch(
        this.kind,
        {
            1: Int16ul,  # Input
            2: Int16ul,  # Result
            3: Int16ul[2],  # NestedResult
        },
    ),
)

ProgrammableMoveCall = Struct(
    "package" / Address,
    "module" / Identifier,
    "function" / Identifier,
    "type_arguments" / PrefixedArray(VarInt, TypeTag),
    "arguments" / PrefixedArray(VarInt, Argument),
)

Command = Struct(
    "kind" / VarInt,
    "value" / Switch(this.kind, {0: ProgrammableMoveCall}),
)

ProgrammableTransaction = Struct(
    "inputs" / PrefixedArray(VarInt, CallArg),
    "commands" / PrefixedArray(VarInt, Command),
)

TransactionKind = Struct(
    "kind" / VarInt,
    "value" / Switch(this.kind, {0: ProgrammableTransaction}),
)

PRIMITIVE_TYPE_TAGS = {
    "bool": 0,
    "u8": 1,
    "u64": 2,
    "u128": 3,
    "address": 4,
    "signer": 5,
    "u16": 8,
    "u32": 9,
    "u256": 10,
}


def normalize_sui_address(address: str) -> str:
    """Lowercase, 0x-prefixed, left-padded to 32 bytes."""
    hex_part = address.lower()
    if hex_part.startswith("0x"):
        hex_part = hex_part[2:]
    if not hex_part or len(hex_part) > 64:
        raise ValueError(f"Invalid Sui address: {address}")
    int(hex_part, 16)  # raises ValueError on non-hex input
    return "0x" + hex_part.zfill(64)


def address_bytes(address: str) -> bytes:
    return bytes.fromhex(normalize_sui_address(address)[2:])


def _split_type_params(params: str) -> list[str]:
    """Split 'A, B<C, D>' on top-level commas."""
    parts = []
    depth = 0
    start = 0
    for i, char in enumerate(params):
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(params[start:i].strip())
            start = i + 1
    parts.append(params[start:].strip())
    return [p for p in parts if p]


def parse_type_tag(type_str: str) -> dict:
    """Parse a Move type string (e.g. '0x2::sui::SUI') into a TypeTag value."""
    type_str = type_str.strip()

    if type_str in PRIMITIVE_TYPE_TAGS:
        return {"kind": PRIMITIVE_TYPE_TAGS[type_str], "value": None}

    if type_str.startswith("vector<") and type_str.endswith(">"):
        return {"kind": 6, "value": parse_type_tag(type_str[len("vector<"):-1])}

    type_params: list[dict] = []
    head = type_str
    if "<" in type_str:
        if not type_str.endswith(">"):
            raise ValueError(f"Invalid Move type: {type_str}")
        head = type_str[: type_str.index("<")]
        inner = type_str[type_str.index("<") + 1 : -1]
        type_params = [parse_type_tag(p) for p in _split_type_params(inner)]

    parts = head.split("::")
    if len(parts) != 3:
        raise ValueError(f"Invalid Move type: {type_str}")
    address, module, name = parts

    return {
        "kind": 7,
        "value": {
            "address": address_bytes(address),
            "module": module,
            "name": name,
            "type_params": type_params,
        },
    }
