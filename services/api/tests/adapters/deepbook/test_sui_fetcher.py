import base64
import json

import httpx
import pytest

from services.api.src.margin.adapters.deepbook.fetcher import (
    MockSuiFetcher,
    ObjectNotFoundError,
    SimulationError,
    SuiRpcError,
    SuiRpcFetcher,
)

SENDER = "0x" + "0" * 64
ONE_BILLION_BCS = [0, 202, 154, 59, 0, 0, 0, 0]


def make_fetcher(result=None, error=None, status_code=200, requests=None):
    """SuiRpcFetcher backed by a canned JSON-RPC response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(json.loads(request.content))
        body = {"jsonrpc": "2.0", "id": 1}
        if error is not None:
            body["error"] = error
        else:
            body["result"] = result
        return httpx.Response(status_code, json=body)

    return SuiRpcFetcher("https://fullnode.test", transport=httpx.MockTransport(handler))


class TestSuiRpcFetcherDevInspect:
    def test_sends_sender_and_base64_tx(self):
        requests = []
        fetcher = make_fetcher(
            result={"effects": {"status": {"status": "success"}}, "results": []},
            requests=requests,
        )

        fetcher.dev_inspect(SENDER, b"\x00\x00\x00")

        assert requests[0]["method"] == "sui_devInspectTransactionBlock"
        assert requests[0]["params"] == [SENDER, base64.b64encode(b"\x00\x00\x00").decode()]

    def test_returns_first_return_value_per_command(self):
        fetcher = make_fetcher(
            result={
                "effects": {"status": {"status": "success"}},
                "results": [
                    {"returnValues": [[ONE_BILLION_BCS, "u64"]]},
                    {"returnValues": []},
                    {},
                ],
            }
        )

        values = fetcher.dev_inspect(SENDER, b"")

        assert values == [bytes(ONE_BILLION_BCS), None, None]

    def test_failed_execution_raises(self):
        fetcher = make_fetcher(
            result={
                "effects": {"status": {"status": "failure", "error": "MoveAbort(...)"}},
                "results": [],
            }
        )

        with pytest.raises(SimulationError, match="MoveAbort"):
            fetcher.dev_inspect(SENDER, b"")

    def test_result_error_raises(self):
        fetcher = make_fetcher(result={"error": "VMVerificationOrDeserializationError"})

        with pytest.raises(SimulationError):
            fetcher.dev_inspect(SENDER, b"")

    def test_rpc_error_raises(self):
        fetcher = make_fetcher(error={"code": -32602, "message": "Invalid params"})

        with pytest.raises(SuiRpcError) as exc:
            fetcher.dev_inspect(SENDER, b"")

        assert exc.value.method == "sui_devInspectTransactionBlock"
        assert exc.value.error["code"] == -32602

    def test_http_error_propagates(self):
        fetcher = make_fetcher(result={}, status_code=503)

        with pytest.raises(httpx.HTTPStatusError):
            fetcher.dev_inspect(SENDER, b"")


class TestSuiRpcFetcherReads:
    def test_get_object_returns_data(self):
        requests = []
        fetcher = make_fetcher(result={"data": {"objectId": "0x1", "content": {}}}, requests=requests)

        data = fetcher.get_object("0x1")

        assert data == {"objectId": "0x1", "content": {}}
        assert requests[0]["params"] == ["0x1", {"showContent": True}]

    def test_get_object_not_found(self):
        fetcher = make_fetcher(result={"error": {"code": "notExists", "object_id": "0x1"}})

        with pytest.raises(ObjectNotFoundError) as exc:
            fetcher.get_object("0x1")

        assert exc.value.object_id == "0x1"

    def test_get_balance(self):
        fetcher = make_fetcher(
            result={"coinType": "0x2::sui::SUI", "coinObjectCount": 2, "totalBalance": "12345"}
        )

        assert fetcher.get_balance(SENDER, "0x2::sui::SUI") == 12345

    def test_get_owned_object_ids(self):
        requests = []
        fetcher = make_fetcher(
            result={
                "data": [{"data": {"objectId": "0xc1"}}, {"error": {}}, {"data": {"objectId": "0xc2"}}],
                "hasNextPage": False,
            },
            requests=requests,
        )

        ids = fetcher.get_owned_object_ids(SENDER, "0x1::margin_pool::SupplierCap")

        assert ids == ["0xc1", "0xc2"]
        assert requests[0]["params"][1]["filter"] == {"StructType": "0x1::margin_pool::SupplierCap"}


class TestMockSuiFetcher:
    def test_dev_inspect_records_call(self):
        fetcher = MockSuiFetcher()
        fetcher.set_mock_response("dev_inspect", [b"\x01"])

        result = fetcher.dev_inspect(SENDER, b"\x00")

        assert result == [b"\x01"]
        call_type, call_args = fetcher.call_history[0]
        assert call_type == "dev_inspect"
        assert call_args["tx_kind"] == b"\x00"

    def test_dev_inspect_returns_empty_when_not_set(self):
        assert MockSuiFetcher().dev_inspect(SENDER, b"") == []

    def test_get_object_raises_when_not_set(self):
        with pytest.raises(ObjectNotFoundError):
            MockSuiFetcher().get_object("0x1")

    def test_get_object_returns_mock_data(self):
        fetcher = MockSuiFetcher({"object": {"objectId": "0x1"}})
        assert fetcher.get_object("0x1") == {"objectId": "0x1"}

    def test_get_balance_defaults_to_zero(self):
        assert MockSuiFetcher().get_balance(SENDER, "0x2::sui::SUI") == 0
