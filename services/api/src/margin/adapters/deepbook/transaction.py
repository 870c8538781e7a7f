from typing import Any, Sequence

from services.api.src.margin.utils.bcs import (
    TransactionKind,
    address_bytes,
    normalize_sui_address,
    parse_type_tag,
)

CLOCK_OBJECT_ID = "0x6"
CLOCK_INITIAL_SHARED_VERSION = 1


def _input(index: int) -> dict[str, Any]:
    return {"kind": 1, "value": index}


class ReadCallBatch:
    """Programmable transaction holding read-only move calls for dev-inspect.

    Shared objects are always passed immutably and added as inputs once.
    The batch can be extended with unrelated calls before it is inspected.
    """

    def __init__(self) -> None:
        self._inputs: list[dict[str, Any]] = []
        self._shared_inputs: dict[str, int] = {}
        self._commands: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def targets(self) -> list[str]:
        """Move call targets in command order."""
        targets = []
        for command in self._commands:
            call = command["value"]
            package = "0x" + call["package"].hex()
            targets.append(f"{package}::{call['module']}::{call['function']}")
        return targets

    def _add_input(self, call_arg: dict[str, Any]) -> int:
        self._inputs.append(call_arg)
        return len(self._inputs) - 1

    def shared_object(self, object_id: str, initial_shared_version: int) -> dict[str, Any]:
        object_id = normalize_sui_address(object_id)
        if object_id not in self._shared_inputs:
            self._shared_inputs[object_id] = self._add_input(
                {
                    "kind": 1,
                    "value": {
                        "kind": 1,
                        "value": {
                            "object_id": address_bytes(object_id),
                            "initial_shared_version": initial_shared_version,
                            "mutable": False,
                        },
                    },
                }
            )
        return _input(self._shared_inputs[object_id])

    def pure_id(self, object_id: str) -> dict[str, Any]:
        return _input(self._add_input({"kind": 0, "value": address_bytes(object_id)}))

    def clock(self) -> dict[str, Any]:
        return self.shared_object(CLOCK_OBJECT_ID, CLOCK_INITIAL_SHARED_VERSION)

    def move_call(
        self,
        target: str,
        arguments: Sequence[dict[str, Any]],
        type_arguments: Sequence[str] = (),
    ) -> int:
        """Append a MoveCall command and return its command index."""
        parts = target.split("::")
        if len(parts) != 3:
            raise ValueError(f"Invalid move call target: {target}")
        package, module, function = parts

        self._commands.append(
            {
                "kind": 0,
                "value": {
                    "package": address_bytes(package),
                    "module": module,
                    "function": function,
                    "type_arguments": [parse_type_tag(t) for t in type_arguments],
                    "arguments": list(arguments),
                },
            }
        )
        return len(self._commands) - 1

    def to_bytes(self) -> bytes:
        """BCS-encoded TransactionKind, as expected by sui_devInspectTransactionBlock."""
        return TransactionKind.build(
            {
                "kind": 0,
                "value": {"inputs": self._inputs, "commands": self._commands},
            }
        )
