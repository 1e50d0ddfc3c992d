from datetime import datetime, timedelta, timezone

from storefront.database import MemoryStore


class FakeClock:
    """Deterministic clock; each call returns the current time, `tick` moves it."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def tick(self, **kwargs):
        self.now += timedelta(**(kwargs or {"minutes": 1}))
        return self.now


def make_store(clock=None):
    clock = clock or FakeClock()
    return MemoryStore(clock=clock, ref_prefix="LWG"), clock


def add_product(store, title="Test Widget", price="100.00", **fields):
    fields.setdefault("description", f"{title} description")
    fields.setdefault("category", "technology")
    return store.create_product(title=title, price=price, **fields)


def checkout_payload(product_id, qty=1, **overrides):
    payload = {
        "items": [{"productId": product_id, "qty": qty}],
        "customerName": "Fatmata Kamara",
        "customerEmail": "fatmata@mailbox.sl",
        "customerPhone": "+232 76 123456",
        "customerAddress": "12 Wilkinson Road, Freetown",
        "deliveryZone": "freetown",
        "paymentMethod": "cash",
    }
    payload.update(overrides)
    return payload
