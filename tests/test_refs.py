import unittest
from datetime import datetime, timezone

from storefront.refs import OrderRefGenerator


class OrderRefGeneratorTestCase(unittest.TestCase):
    def setUp(self):
        self.gen = OrderRefGenerator("LWG")
        self.day = datetime(2024, 1, 1, 10, 30, tzinfo=timezone.utc)

    def test_sequence_starts_at_one_and_is_zero_padded(self):
        self.assertEqual(self.gen.next_ref(self.day), "LWG-20240101-0001")
        self.assertEqual(self.gen.next_ref(self.day), "LWG-20240101-0002")
        self.assertEqual(self.gen.current(self.day), 2)

    def test_new_day_restarts_counter(self):
        self.gen.next_ref(self.day)
        self.gen.next_ref(self.day)
        next_day = datetime(2024, 1, 2, 0, 0, 1, tzinfo=timezone.utc)
        self.assertEqual(self.gen.next_ref(next_day), "LWG-20240102-0001")
        # earlier day keeps its own counter
        self.assertEqual(self.gen.next_ref(self.day), "LWG-20240101-0003")

    def test_unique_and_strictly_increasing(self):
        refs = [self.gen.next_ref(self.day) for _ in range(50)]
        self.assertEqual(len(set(refs)), 50)
        seqs = [int(r.rsplit("-", 1)[1]) for r in refs]
        self.assertEqual(seqs, sorted(seqs))
        self.assertEqual(seqs, list(range(1, 51)))

    def test_overflow_widens_field(self):
        self.gen._sequences["20240101"] = 9999
        with self.assertLogs("storefront.refs", level="WARNING"):
            ref = self.gen.next_ref(self.day)
        self.assertEqual(ref, "LWG-20240101-10000")
        self.assertEqual(self.gen.next_ref(self.day), "LWG-20240101-10001")


if __name__ == "__main__":
    unittest.main()
