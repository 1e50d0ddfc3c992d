"""
Order notifications — posts order events to an optional webhook
(email / SMS / WhatsApp relays sit behind it).
"""

from typing import Optional

import httpx

from storefront import config
from storefront.models import Order
from storefront.schemas import OrderOut
from storefront.utils.logger import get_logger

_logger = get_logger(__name__)


def order_event(order: Order, event: str = "order.placed") -> dict:
    return {"event": event, "order": OrderOut.model_validate(order).dump()}


async def notify_order(order: Order, event: str = "order.placed",
                       url: Optional[str] = None,
                       client: Optional[httpx.AsyncClient] = None) -> bool:
    """POST the event to the webhook. Returns True if it was delivered."""
    url = url if url is not None else config.NOTIFY_WEBHOOK_URL
    if not url:
        _logger.debug(f"No webhook configured, skipping {event} for {order.ref}")
        return False
    if client is None:
        async with httpx.AsyncClient(timeout=config.NOTIFY_TIMEOUT_SECONDS) as client:
            return await _post_event(client, url, order, event)
    return await _post_event(client, url, order, event)


async def _post_event(client: httpx.AsyncClient, url: str, order: Order, event: str) -> bool:
    try:
        resp = await client.post(url, json=order_event(order, event))
        resp.raise_for_status()
    except httpx.HTTPError as e:
        _logger.warning(f"Webhook {event} for {order.ref} failed: {e}")
        return False
    _logger.info(f"Webhook {event} sent for {order.ref}")
    return True
