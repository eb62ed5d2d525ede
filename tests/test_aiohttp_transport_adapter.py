import asyncio

import aiohttp
import pytest
from aioresponses import aioresponses
from multidict import CIMultiDict
from yarl import URL

from httpdispatch.adapters.aiohttp_transport_adapter import AioHttpTransportAdapter
from httpdispatch.adapters.json_decoder_adapter import JsonResponseDecoder
from httpdispatch.core.config import TransportConfig
from httpdispatch.core.exceptions import TransportFailure
from httpdispatch.core.managers.dispatcher import Dispatcher
from httpdispatch.core.models.outcome import ClientError, ErrorKind, Success

from sample_api import CreatePostRequest, User, UserRequest

"""
Tests for AioHttpTransportAdapter behavior.

Each test verifies how the adapter maps upstream responses and errors:
- Any HTTP answer, error statuses included, comes back as a RawResult with
  status, headers and raw body bytes; the adapter never raises on status.
- Timeouts, connection errors and invalid URLs become TransportFailure with a
  reason tag so the dispatcher can report a TransportError.
"""

USER_URL = "https://api.example.com/users/123"


@pytest.mark.asyncio
async def test_execute_returns_raw_result():
    # Happy path: provider answers 200 with JSON; bytes are passed through
    # untouched, decoding is the dispatcher's job.
    with aioresponses() as m:
        m.get(USER_URL, status=200, body=b'{"id":123,"name":"Ann","email":"ann@example.com"}')

        async with AioHttpTransportAdapter() as transport:
            raw = await transport.execute(UserRequest.build())

    assert raw.status == 200
    assert raw.body == b'{"id":123,"name":"Ann","email":"ann@example.com"}'
    assert raw.header("content-type") == "application/json"


@pytest.mark.asyncio
async def test_error_status_is_not_a_transport_failure():
    # 404 and 500 are answers from the remote endpoint, not transport errors
    with aioresponses() as m:
        m.get(USER_URL, status=404, body='{"error":"not found"}')
        m.get(USER_URL, status=500, body="Server Error")

        async with AioHttpTransportAdapter() as transport:
            not_found = await transport.execute(UserRequest.build())
            server_error = await transport.execute(UserRequest.build())

    assert not_found.status == 404
    assert not_found.body == b'{"error":"not found"}'
    assert server_error.status == 500
    assert server_error.body == b"Server Error"


@pytest.mark.asyncio
async def test_repeated_response_headers_keep_every_value():
    headers = CIMultiDict([("Set-Cookie", "session=1"), ("Set-Cookie", "theme=dark")])
    with aioresponses() as m:
        m.get(USER_URL, status=204, headers=headers)

        async with AioHttpTransportAdapter() as transport:
            raw = await transport.execute(UserRequest.build())

    assert raw.header_values("set-cookie") == ["session=1", "theme=dark"]
    assert raw.header("SET-COOKIE") == "session=1"


@pytest.mark.asyncio
async def test_timeout_maps_to_transport_failure():
    with aioresponses() as m:
        m.get(USER_URL, exception=asyncio.TimeoutError())

        async with AioHttpTransportAdapter() as transport:
            with pytest.raises(TransportFailure) as excinfo:
                await transport.execute(UserRequest.build())

    assert excinfo.value.reason == "timeout"
    assert isinstance(excinfo.value.cause, asyncio.TimeoutError)


@pytest.mark.asyncio
async def test_connection_error_maps_to_transport_failure():
    with aioresponses() as m:
        m.get(USER_URL, exception=aiohttp.ClientConnectionError("Connection refused"))

        async with AioHttpTransportAdapter() as transport:
            with pytest.raises(TransportFailure) as excinfo:
                await transport.execute(UserRequest.build())

    assert excinfo.value.reason == "connection"
    assert "Connection refused" in excinfo.value.message


@pytest.mark.asyncio
async def test_invalid_url_maps_to_transport_failure():
    with aioresponses() as m:
        m.get(USER_URL, exception=aiohttp.InvalidURL(USER_URL))

        async with AioHttpTransportAdapter() as transport:
            with pytest.raises(TransportFailure) as excinfo:
                await transport.execute(UserRequest.build())

    assert excinfo.value.reason == "invalid_url"


@pytest.mark.asyncio
async def test_other_client_errors_map_to_transport_failure():
    with aioresponses() as m:
        m.get(USER_URL, exception=aiohttp.ClientPayloadError("truncated"))

        async with AioHttpTransportAdapter() as transport:
            with pytest.raises(TransportFailure) as excinfo:
                await transport.execute(UserRequest.build())

    assert excinfo.value.reason == "client"


@pytest.mark.asyncio
async def test_method_headers_and_body_are_forwarded():
    # POST descriptor: method, body bytes and headers reach aiohttp as given;
    # config default headers fill in only what the descriptor leaves unset.
    url = "https://api.example.com/posts"
    config = TransportConfig(
        default_headers={"User-Agent": "httpdispatch-tests", "content-type": "text/plain"}
    )
    request = CreatePostRequest.build(title="hello", body="world")

    with aioresponses() as m:
        m.post(url, status=201, body=b'{"id":1,"title":"hello","body":"world"}')

        async with AioHttpTransportAdapter(config) as transport:
            raw = await transport.execute(request)

        call = m.requests[("POST", URL(url))][0]

    assert raw.status == 201
    assert call.kwargs["data"] == b'{"title": "hello", "body": "world"}'
    assert call.kwargs["headers"] == {
        "User-Agent": "httpdispatch-tests",
        "Content-Type": "application/json",
    }


@pytest.mark.asyncio
async def test_execute_without_session_raises():
    transport = AioHttpTransportAdapter()
    with pytest.raises(RuntimeError):
        await transport.execute(UserRequest.build())


@pytest.mark.asyncio
async def test_close_is_idempotent():
    transport = AioHttpTransportAdapter()
    async with transport:
        pass
    await transport.close()


@pytest.mark.asyncio
async def test_dispatcher_end_to_end_over_aiohttp():
    # Full pipeline: aiohttp transport -> status classification -> JSON decoder
    with aioresponses() as m:
        m.get(USER_URL, status=200, body=b'{"id":123,"name":"Ann","email":"ann@example.com"}')
        m.get("https://api.example.com/users/404", status=404, body=b'{"error":"not found"}')
        m.get("https://api.example.com/users/500", exception=asyncio.TimeoutError())

        async with Dispatcher(AioHttpTransportAdapter(), JsonResponseDecoder()) as dispatcher:
            found, missing, slow = await dispatcher.dispatch_all(
                UserRequest.build(),
                UserRequest.build(user_id=404),
                UserRequest.build(user_id=500),
            )

    assert found == Success(User(id=123, name="Ann", email="ann@example.com"))
    assert isinstance(missing.error, ClientError)
    assert missing.error.status == 404
    assert missing.error.body == b'{"error":"not found"}'
    assert slow.kind is ErrorKind.TRANSPORT
    assert slow.error.reason == "timeout"
