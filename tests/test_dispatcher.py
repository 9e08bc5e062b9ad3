"""Tests for webhook delivery."""

import json

import httpx
import pytest
import respx
from httpx import Response

from gchat_notify import dispatcher
from gchat_notify.channels.googlechat import build_card, format_google_chat
from gchat_notify.dispatcher import DeliveryResult, deliver, http_client, send_notification


@pytest.mark.asyncio
@respx.mock
async def test_send_notification_success(notification_request, run_context, webhook_url) -> None:
    route = respx.post(webhook_url).mock(return_value=Response(200, json={"name": "spaces/AAAA/messages/1"}))
    card = build_card(notification_request, run_context)

    result = await send_notification("Lint", webhook_url, card)

    assert result
    assert result.ok is True
    assert result.status_code == 200
    assert route.call_count == 1
    sent = route.calls.last.request
    assert sent.headers["Content-Type"].startswith("application/json")
    body = json.loads(sent.content)
    assert body["cardsV2"][0]["cardId"] == "Lint"
    assert body["cardsV2"][0]["card"]["sections"] == card["sections"]


@pytest.mark.asyncio
@respx.mock
async def test_send_notification_server_error(notification_request, run_context, webhook_url) -> None:
    route = respx.post(webhook_url).mock(return_value=Response(500, json={"error": {"code": 500}}))
    card = build_card(notification_request, run_context)

    result = await send_notification("Lint", webhook_url, card)

    assert not result
    assert result.ok is False
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_send_notification_transport_error(notification_request, run_context, webhook_url) -> None:
    route = respx.post(webhook_url).mock(side_effect=httpx.ConnectError("connection refused"))
    card = build_card(notification_request, run_context)

    result = await send_notification("Lint", webhook_url, card)

    assert not result
    assert result.ok is False
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_deliver_captures_error_response(notification_request, run_context, webhook_url) -> None:
    respx.post(webhook_url).mock(return_value=Response(400, text="Invalid JSON payload"))
    payload = format_google_chat("Lint", webhook_url, build_card(notification_request, run_context))

    result = await deliver(payload)

    assert result.ok is False
    assert result.status_code == 400
    assert result.request_body == payload.body
    assert result.response_body == "Invalid JSON payload"


@pytest.mark.asyncio
@respx.mock
async def test_deliver_transport_error_has_empty_response(notification_request, run_context, webhook_url) -> None:
    respx.post(webhook_url).mock(side_effect=httpx.ReadTimeout("timed out"))
    payload = format_google_chat("Lint", webhook_url, build_card(notification_request, run_context))

    result = await deliver(payload, timeout=1)

    assert result == DeliveryResult(ok=False, status_code=None, request_body=payload.body)
    assert result.response_body == ""


@pytest.mark.asyncio
async def test_deliver_invalid_url_does_not_raise(notification_request, run_context) -> None:
    payload = format_google_chat("Lint", "not a url", build_card(notification_request, run_context))

    result = await deliver(payload)

    assert result.ok is False


def test_http_client_has_no_timeout_by_default() -> None:
    client = http_client()
    assert client.timeout == httpx.Timeout(None)


def test_http_client_timeout_override() -> None:
    client = http_client(timeout=2.5)
    assert client.timeout == httpx.Timeout(2.5)


@pytest.mark.asyncio
@respx.mock
async def test_deliver_waits_for_slow_webhook_by_default(
    notification_request, run_context, webhook_url, monkeypatch
) -> None:
    respx.post(webhook_url).mock(return_value=Response(200, json={}))
    clients = []

    def recording_client(**kwargs):
        client = http_client(**kwargs)
        clients.append(client)
        return client

    monkeypatch.setattr(dispatcher, "http_client", recording_client)
    payload = format_google_chat("Lint", webhook_url, build_card(notification_request, run_context))

    result = await deliver(payload)

    assert result.ok is True
    assert clients[0].timeout == httpx.Timeout(None)
