"""
Tests para los transportes.
"""

import httpx
import pytest

from payway.adapters.base import (
    NoResponseError,
    RequestSetupError,
    TransportResponse,
    TransportResponseError,
)
from payway.adapters.factory import get_transport
from payway.adapters.httpx_transport import HttpxTransport
from payway.adapters.mock_transport import MockTransport
from payway.client import PURCHASE_PATH, PayWayClient
from payway.utils.exceptions import PayWayError, PayWayRequestError
from tests.conftest import API_KEY, BASE_URL, FIXED_NOW, MERCHANT_ID


FIELDS = {
    "req_time": "20240102030405",
    "merchant_id": "ec000002",
    "tran_id": "order-1",
    "hash": "abc==",
}


def make_transport(handler) -> HttpxTransport:
    """HttpxTransport sobre httpx.MockTransport."""
    client = httpx.AsyncClient(
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )
    return HttpxTransport(BASE_URL, client=client)


class TestHttpxTransport:
    """Tests para HttpxTransport."""

    @pytest.mark.asyncio
    async def test_sends_ordered_multipart_fields(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(200, json={"status": "ok"})

        transport = make_transport(handler)

        response = await transport.send(PURCHASE_PATH, FIELDS)

        request = captured["request"]
        assert request.method == "POST"
        assert request.url == f"{BASE_URL}{PURCHASE_PATH}"
        assert request.headers["content-type"].startswith("multipart/form-data; boundary=")

        content = request.content
        positions = [content.index(f'name="{name}"'.encode()) for name in FIELDS]
        assert positions == sorted(positions)
        assert b"filename=" not in content
        assert b"order-1" in content

        assert response.status_code == 200
        assert response.body == {"status": "ok"}

        await transport.aclose()

    @pytest.mark.asyncio
    async def test_non_json_body_is_returned_as_text(self):
        transport = make_transport(lambda request: httpx.Response(200, text="OK"))

        response = await transport.send(PURCHASE_PATH, FIELDS)

        assert response.body == "OK"

    @pytest.mark.asyncio
    async def test_error_status_raises_response_error(self):
        transport = make_transport(
            lambda request: httpx.Response(400, json={"message": "Invalid", "code": "E1"})
        )

        with pytest.raises(TransportResponseError) as exc:
            await transport.send(PURCHASE_PATH, FIELDS)

        assert exc.value.response.status_code == 400
        assert exc.value.response.body == {"message": "Invalid", "code": "E1"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error_class",
        [httpx.ReadTimeout, httpx.ConnectError, httpx.RemoteProtocolError],
    )
    async def test_no_response_errors(self, error_class):
        def handler(request):
            raise error_class("no response", request=request)

        transport = make_transport(handler)

        with pytest.raises(NoResponseError):
            await transport.send(PURCHASE_PATH, FIELDS)

    @pytest.mark.asyncio
    async def test_setup_errors(self):
        def handler(request):
            raise httpx.UnsupportedProtocol("bad scheme", request=request)

        transport = make_transport(handler)

        with pytest.raises(RequestSetupError, match="bad scheme"):
            await transport.send(PURCHASE_PATH, FIELDS)

    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = httpx.AsyncClient(
            base_url=BASE_URL,
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
        )
        transport = HttpxTransport(BASE_URL, client=client)

        await transport.aclose()

        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_end_to_end_through_client(self):
        """El cliente mapea los errores HTTP reales a PayWayError."""
        transport = make_transport(
            lambda request: httpx.Response(401, json={"message": "Wrong hash", "code": "PTL02"})
        )
        client = PayWayClient(
            BASE_URL,
            MERCHANT_ID,
            API_KEY,
            transport=transport,
            clock=lambda: FIXED_NOW,
        )

        with pytest.raises(PayWayError) as exc:
            await client.check_transaction("order-1")

        assert exc.value.status_code == 401
        assert exc.value.error_code == "PTL02"
        assert str(exc.value) == "PayWay API error: Wrong hash"

    @pytest.mark.asyncio
    async def test_end_to_end_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = PayWayClient(BASE_URL, MERCHANT_ID, API_KEY, transport=make_transport(handler))

        with pytest.raises(PayWayRequestError, match="Network error"):
            await client.check_transaction("order-1")


class TestMockTransport:
    """Tests para MockTransport."""

    @pytest.mark.asyncio
    async def test_records_requests(self):
        transport = MockTransport(body={"ok": True})

        response = await transport.send("/path", FIELDS)

        assert response.body == {"ok": True}
        assert transport.last_request.path == "/path"
        assert transport.last_request.fields == FIELDS

        transport.clear_requests()
        assert transport.last_request is None

    @pytest.mark.asyncio
    async def test_handler_result(self):
        transport = MockTransport(handler=lambda path, fields: {"echo": fields["tran_id"]})

        response = await transport.send("/path", FIELDS)

        assert response.body == {"echo": "order-1"}

    @pytest.mark.asyncio
    async def test_handler_can_return_error_response(self):
        transport = MockTransport(
            handler=lambda path, fields: TransportResponse(status_code=500, body={"message": "down"}),
        )

        with pytest.raises(TransportResponseError):
            await transport.send("/path", FIELDS)

    @pytest.mark.asyncio
    async def test_configured_error(self):
        transport = MockTransport(error=NoResponseError("timeout"))

        with pytest.raises(NoResponseError):
            await transport.send("/path", FIELDS)

        assert len(transport.requests) == 1


class TestTransportFactory:
    """Tests para get_transport."""

    @pytest.mark.asyncio
    async def test_httpx(self):
        transport = get_transport("httpx", base_url=BASE_URL, timeout=5)

        assert isinstance(transport, HttpxTransport)
        await transport.aclose()

    def test_mock(self):
        assert isinstance(get_transport("MOCK"), MockTransport)

    def test_unknown(self):
        with pytest.raises(ValueError, match="not supported"):
            get_transport("requests")
