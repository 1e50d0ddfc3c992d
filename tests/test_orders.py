import threading
import unittest
from decimal import Decimal

from storefront.errors import NotFoundError, ValidationError
from storefront.models import ProductPatch
from storefront.orders import (
    LineRequest, can_transition, change_status, place_order, render_receipt,
)

from support import add_product, make_store

CUSTOMER = dict(
    customer_name="Fatmata Kamara",
    customer_email="fatmata@mailbox.sl",
    customer_phone="+232 76 123456",
    customer_address="12 Wilkinson Road",
    delivery_zone="freetown",
    payment_method="cash",
)


class PlaceOrderTestCase(unittest.TestCase):
    def setUp(self):
        self.store, self.clock = make_store()
        self.widget = add_product(self.store, "Test Widget", "100.00")
        self.gadget = add_product(self.store, "Gadget", "12.50")

    def test_matching_client_totals_succeed(self):
        order = place_order(self.store, [LineRequest(self.widget.id, 1)], **CUSTOMER,
                            subtotal=100, delivery_fee=25, grand_total=125)
        self.assertEqual(order.subtotal, Decimal("100.00"))
        self.assertEqual(order.delivery_fee, Decimal("25.00"))
        self.assertEqual(order.grand_total, Decimal("125.00"))
        self.assertEqual(order.status, "Processing")
        self.assertEqual(order.ref, "LWG-20240101-0001")

    def test_mismatched_grand_total_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            place_order(self.store, [LineRequest(self.widget.id, 1)], **CUSTOMER,
                        subtotal=100, delivery_fee=25, grand_total=999)
        self.assertIn("grandTotal", ctx.exception.details)
        self.assertEqual(self.store.get_orders()[1], 0)

    def test_client_delivery_fee_is_not_trusted(self):
        with self.assertRaises(ValidationError):
            place_order(self.store, [LineRequest(self.widget.id, 1)], **CUSTOMER,
                        delivery_fee=0)

    def test_totals_recomputed_without_client_values(self):
        order = place_order(
            self.store,
            [LineRequest(self.widget.id, 2), LineRequest(self.gadget.id, 3)],
            **dict(CUSTOMER, delivery_zone="provinces"),
        )
        self.assertEqual(order.subtotal, Decimal("237.50"))
        self.assertEqual(order.delivery_fee, Decimal("100.00"))
        self.assertEqual(order.grand_total, order.subtotal + order.delivery_fee)

    def test_unknown_product_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            place_order(self.store, [LineRequest("ghost", 1)], **CUSTOMER)
        self.assertEqual(ctx.exception.details, {"productIds": ["ghost"]})

    def test_empty_order_rejected(self):
        with self.assertRaises(ValidationError):
            place_order(self.store, [], **CUSTOMER)

    def test_line_items_are_snapshots(self):
        order = place_order(self.store, [LineRequest(self.widget.id, 1)], **CUSTOMER)
        self.store.update_product(self.widget.id, ProductPatch(title="Renamed", price=Decimal("1")))
        self.store.delete_product(self.widget.id)
        stored = self.store.get_order_by_ref(order.ref)
        self.assertEqual(stored.items[0].title, "Test Widget")
        self.assertEqual(stored.items[0].price, Decimal("100.00"))

    def test_receipt_lists_lines_and_totals(self):
        order = place_order(self.store, [LineRequest(self.gadget.id, 2)], **CUSTOMER,
                            notes="Call on arrival")
        text = render_receipt(order)
        self.assertIn(order.ref, text)
        self.assertIn("2 x Gadget @ NLe 12.50 = NLe 25.00", text)
        self.assertIn("Total: NLe 50.00", text)
        self.assertIn("Notes: Call on arrival", text)


class StatusTransitionTestCase(unittest.TestCase):
    def setUp(self):
        self.store, _ = make_store()
        product = add_product(self.store)
        self.order = place_order(self.store, [LineRequest(product.id, 1)], **CUSTOMER)

    def test_transition_table(self):
        self.assertTrue(can_transition("Processing", "Shipped"))
        self.assertTrue(can_transition("Processing", "Cancelled"))
        self.assertTrue(can_transition("Shipped", "Completed"))
        self.assertFalse(can_transition("Shipped", "Processing"))
        self.assertFalse(can_transition("Cancelled", "Shipped"))
        self.assertFalse(can_transition("Completed", "Cancelled"))
        self.assertFalse(can_transition("Processing", "Processing"))

    def test_happy_path(self):
        shipped = change_status(self.store, self.order.id, "Shipped")
        self.assertEqual(shipped.status, "Shipped")
        completed = change_status(self.store, self.order.id, "Completed")
        self.assertEqual(completed.status, "Completed")
        self.assertEqual(self.store.get_order(self.order.id).status, "Completed")

    def test_illegal_transition_rejected(self):
        change_status(self.store, self.order.id, "Cancelled")
        with self.assertRaises(ValidationError):
            change_status(self.store, self.order.id, "Shipped")
        self.assertEqual(self.store.get_order(self.order.id).status, "Cancelled")

    def test_unknown_status_and_order(self):
        with self.assertRaises(ValidationError):
            change_status(self.store, self.order.id, "Lost")
        with self.assertRaises(NotFoundError):
            change_status(self.store, "missing", "Shipped")

    def test_concurrent_transitions_from_processing(self):
        barrier = threading.Barrier(2)
        outcomes = []

        def move(status):
            barrier.wait()
            try:
                outcomes.append(change_status(self.store, self.order.id, status).status)
            except ValidationError:
                outcomes.append("refused")

        threads = [threading.Thread(target=move, args=(s,)) for s in ("Shipped", "Cancelled")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(outcomes.count("refused"), 1)
        winner = next(o for o in outcomes if o != "refused")
        self.assertEqual(self.store.get_order(self.order.id).status, winner)


if __name__ == "__main__":
    unittest.main()
