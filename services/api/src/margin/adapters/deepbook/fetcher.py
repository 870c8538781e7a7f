import base64
from typing import Any

import httpx


class SuiRpcError(RuntimeError):
    """Raised when the fullnode answers with a JSON-RPC error."""

    def __init__(self, method: str, error: Any):
        self.method = method
        self.error = error
        super().__init__(f"{method} failed: {error}")


class SimulationError(RuntimeError):
    """Raised when a dev-inspect transaction aborts."""


class ObjectNotFoundError(LookupError):
    def __init__(self, object_id: str, error: Any = None):
        self.object_id = object_id
        self.error = error
        super().__init__(f"Object not found: {object_id} ({error})")


def _first_return_value(command_result: dict[str, Any]) -> bytes | None:
    """Raw BCS bytes of a command's first return value, if any."""
    return_values = command_result.get("returnValues") or []
    if not return_values or not return_values[0]:
        return None
    raw = return_values[0][0]
    if raw is None:
        return None
    return bytes(raw)


class SuiRpcFetcher:
    def __init__(
        self,
        rpc_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.transport = transport

    def _call(self, method: str, params: list[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }

        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            response = client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()

        if "error" in data:
            raise SuiRpcError(method, data["error"])
        return data.get("result")

    def dev_inspect(self, sender: str, tx_kind: bytes) -> list[bytes | None]:
        """Simulate a transaction kind and return each command's first return value.

        The result list is in command order; commands without return data map
        to None.
        """
        result = self._call(
            "sui_devInspectTransactionBlock",
            [sender, base64.b64encode(tx_kind).decode("ascii")],
        )

        status = (result.get("effects") or {}).get("status") or {}
        if result.get("error") or status.get("status") == "failure":
            raise SimulationError(
                f"Dev-inspect failed: {result.get('error') or status.get('error', 'unknown error')}"
            )

        return [_first_return_value(r) for r in result.get("results") or []]

    def get_object(self, object_id: str) -> dict[str, Any]:
        """Fetch an object with its Move content."""
        result = self._call("sui_getObject", [object_id, {"showContent": True}])

        if result.get("error") or not result.get("data"):
            raise ObjectNotFoundError(object_id, result.get("error"))
        return result["data"]

    def get_balance(self, owner: str, coin_type: str) -> int:
        """Total balance of a coin type owned by an address, in smallest units."""
        result = self._call("suix_getBalance", [owner, coin_type])
        return int(result["totalBalance"])

    def get_owned_object_ids(self, owner: str, struct_type: str, limit: int = 50) -> list[str]:
        """IDs of objects of a given Move type owned by an address (first page)."""
        result = self._call(
            "suix_getOwnedObjects",
            [
                owner,
                {"filter": {"StructType": struct_type}, "options": {"showType": True}},
                None,
                limit,
            ],
        )

        return [item["data"]["objectId"] for item in result.get("data", []) if item.get("data")]


class MockSuiFetcher(SuiRpcFetcher):
    """Mock fetcher for testing without network calls."""

    def __init__(self, mock_data: dict[str, Any] | None = None):
        super().__init__("http://mock")
        self.mock_data = mock_data or {}
        self.call_history: list[tuple[str, dict]] = []

    def set_mock_response(self, call_type: str, response: Any) -> None:
        self.mock_data[call_type] = response

    def dev_inspect(self, sender: str, tx_kind: bytes) -> list[bytes | None]:
        self.call_history.append(("dev_inspect", {"sender": sender, "tx_kind": tx_kind}))
        return self.mock_data.get("dev_inspect", [])

    def get_object(self, object_id: str) -> dict[str, Any]:
        self.call_history.append(("get_object", {"object_id": object_id}))
        if "object" not in self.mock_data:
            raise ObjectNotFoundError(object_id)
        return self.mock_data["object"]

    def get_balance(self, owner: str, coin_type: str) -> int:
        self.call_history.append(("get_balance", {"owner": owner, "coin_type": coin_type}))
        return self.mock_data.get("balance", 0)

    def get_owned_object_ids(self, owner: str, struct_type: str, limit: int = 50) -> list[str]:
        self.call_history.append(
            ("get_owned_object_ids", {"owner": owner, "struct_type": struct_type})
        )
        return self.mock_data.get("owned_objects", [])
