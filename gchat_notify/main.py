"""Entry point: announce a validation result in Google Chat."""

import asyncio
import logging
import sys

from gchat_notify.channels.googlechat import build_card
from gchat_notify.config import load_request, load_run_context, settings
from gchat_notify.dispatcher import send_notification
from gchat_notify.errors import MissingConfigurationError
from gchat_notify.log import configure_logging

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "error sending notification to google chat"


async def run() -> int:
    """
    Read the inputs, build the card and deliver it once.

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    try:
        request = load_request()
        ctx = load_run_context()
        card = build_card(request, ctx)
        result = await send_notification(
            request.name, request.url, card, timeout=settings.request_timeout
        )
    except MissingConfigurationError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"{FAILURE_MESSAGE}: {e}", exc_info=settings.debug)
        return 1

    if not result:
        logger.error(
            f"{FAILURE_MESSAGE}, body: {result.request_body}, "
            f"response: {result.response_body}"
        )
        return 1

    logger.debug(f"Sent notification: {request.name}")
    return 0


def main() -> None:
    configure_logging(settings.debug)
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
