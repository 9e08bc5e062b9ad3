"""Notification delivery to chat webhooks."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from gchat_notify.channels import ChannelPayload
from gchat_notify.channels.googlechat import format_google_chat

logger = logging.getLogger(__name__)

# No client-side limit; the runner's step timeout bounds the run
DEFAULT_TIMEOUT = None


@dataclass
class DeliveryResult:
    """Outcome of a single delivery attempt, kept for diagnostics only."""
    ok: bool
    status_code: Optional[int]
    request_body: str
    response_body: str = ""

    def __bool__(self) -> bool:
        return self.ok


def http_client(
    timeout: Optional[float] = DEFAULT_TIMEOUT,
    follow_redirects: bool = True,
    **kwargs,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=follow_redirects,
        **kwargs,
    )


async def deliver(
    payload: ChannelPayload,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> DeliveryResult:
    """
    Send a single notification via HTTP.

    Exactly one attempt is made. Errors are reported through the returned
    result rather than raised.

    Args:
        payload: ChannelPayload instance
        timeout: Seconds to wait for the webhook, or None to wait indefinitely
    """
    try:
        async with http_client(timeout=timeout) as client:
            response = await client.request(
                method=payload.method,
                url=payload.url,
                headers=payload.headers,
                content=payload.body,
            )
    except Exception as e:
        logger.debug(f"request failed with error: {e}, body: {payload.body}, response: ")
        return DeliveryResult(ok=False, status_code=None, request_body=payload.body)

    if not response.is_success:
        logger.debug(
            f"request failed with status {response.status_code}, "
            f"body: {payload.body}, response: {response.text}"
        )
        return DeliveryResult(
            ok=False,
            status_code=response.status_code,
            request_body=payload.body,
            response_body=response.text,
        )

    logger.debug(f"request success with status: {response.status_code}")
    return DeliveryResult(
        ok=True,
        status_code=response.status_code,
        request_body=payload.body,
        response_body=response.text,
    )


async def send_notification(
    name: str,
    url: str,
    card: dict,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> DeliveryResult:
    """
    Post a built card to a Google Chat webhook.

    The result is truthy when the webhook accepted the message.
    """
    return await deliver(format_google_chat(name, url, card), timeout=timeout)
