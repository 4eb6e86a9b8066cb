import asyncio

import httpx
import pytest

from uspsclient.exceptions import TransportError
from uspsclient.transport import Transport

SERVER = "https://secure.shippingapis.com/ShippingAPI.dll"


@pytest.mark.asyncio
async def test_send_query_parameters():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"<Ok/>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        body = await Transport(http).send(SERVER, "Verify", '<A USERID="U"/>', 1000)

    assert body == b"<Ok/>"
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert seen[0].url.params["API"] == "Verify"
    assert seen[0].url.params["XML"] == '<A USERID="U"/>'


@pytest.mark.asyncio
async def test_send_returns_body_for_error_status():
    def handler(request):
        return httpx.Response(500, content=b"<Error/>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        assert await Transport(http).send(SERVER, "Verify", "<A/>", 1000) == b"<Error/>"


@pytest.mark.asyncio
async def test_send_connection_error():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(TransportError) as excinfo:
            await Transport(http).send(SERVER, "RateV4", "<A/>", 1000)

    err = excinfo.value
    assert err.message == "connection refused"
    assert isinstance(err.cause, httpx.ConnectError)
    assert err.context == {"method": "RateV4", "during": "request"}
    assert err.timeout is False
    # Exactly one attempt
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_send_httpx_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(TransportError) as excinfo:
            await Transport(http).send(SERVER, "Verify", "<A/>", 1000)

    assert excinfo.value.timeout is True


@pytest.mark.asyncio
async def test_send_deadline_expires_on_slow_server():
    async def handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, content=b"<Late/>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(TransportError) as excinfo:
            await Transport(http).send(SERVER, "CityStateLookup", "<A/>", 50)

    assert excinfo.value.timeout is True
    assert excinfo.value.during == "request"
