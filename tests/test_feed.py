import unittest

from app.waterfall.feed import SAMPLE_ITEMS, PhotoFeed, page_to_limit_offset, sample_source
from app.waterfall.layout.engine import MasonryItem, MasonryLayoutEngine


class TestPaginationHelpers(unittest.TestCase):
    def test_page_to_limit_offset(self):
        self.assertEqual(page_to_limit_offset(page=1, page_size=100), (100, 0))
        self.assertEqual(page_to_limit_offset(page=2, page_size=100), (100, 100))
        self.assertEqual(page_to_limit_offset(page=3, page_size=25), (25, 50))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            page_to_limit_offset(page=0, page_size=10)
        with self.assertRaises(ValueError):
            page_to_limit_offset(page=1, page_size=0)


class TestSampleSource(unittest.TestCase):
    def test_seeded_source_is_deterministic(self):
        a = sample_source(3)(1, 10)
        b = sample_source(3)(1, 10)
        self.assertEqual([i.height for i in a], [i.height for i in b])
        self.assertTrue(all(250 <= i.height <= 400 for i in a))

    def test_keys_continue_across_pages(self):
        fetch = sample_source(1)
        self.assertEqual(fetch(2, 3)[0].key, "photo-3")

    def test_fixed_sample_items(self):
        engine = MasonryLayoutEngine(2)
        engine.place_all(SAMPLE_ITEMS[:4])
        col0, col1 = engine.snapshot()
        self.assertEqual([i.height for i in col0], [300, 350])
        self.assertEqual([i.height for i in col1], [250, 400])


class TestPhotoFeed(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = MasonryLayoutEngine(2)
        self.feed = PhotoFeed(sample_source(5), self.engine, page_size=10)

    def test_load_more_appends_pages(self):
        self.assertEqual(len(self.feed.load_more()), 10)
        first = self.feed.items
        self.feed.load_more()
        self.assertEqual(self.feed.page, 3)
        self.assertEqual(len(self.feed.items), 20)
        # Earlier placements are never revisited.
        self.assertEqual(self.feed.items[:10], first)

    def test_refresh_starts_over(self):
        self.feed.load_more()
        self.feed.load_more()
        self.feed.refresh()
        self.assertEqual(len(self.feed.items), 10)
        self.assertEqual(self.feed.page, 2)
        self.assertEqual(self.feed.items[0].key, "photo-0")

    def test_set_columns_keeps_items(self):
        self.feed.load_more()
        before = self.feed.items
        snap = self.feed.set_columns(3)
        self.assertEqual(len(snap), 3)
        self.assertEqual(self.feed.items, before)
        self.assertEqual(sum(len(b) for b in snap), 10)

    def test_invalid_items_are_skipped(self):
        def source(page, page_size):
            return [MasonryItem("ok1", 10), MasonryItem("bad", 0), MasonryItem("ok2", 20)]

        feed = PhotoFeed(source, MasonryLayoutEngine(2))
        with self.assertLogs("app.waterfall.feed", level="WARNING"):
            chosen = feed.load_more()
        self.assertEqual(chosen, [0, 1])
        self.assertEqual([i.key for i in feed.items], ["ok1", "ok2"])

    def test_load_more_is_ignored_while_loading(self):
        nested = []

        def source(page, page_size):
            nested.append(feed.load_more())
            return [MasonryItem(f"n{page}", 10)]

        feed = PhotoFeed(source, MasonryLayoutEngine(1))
        feed.load_more()
        self.assertEqual(nested, [[]])
        self.assertEqual(len(feed.items), 1)
        self.assertFalse(feed.is_loading)

    def test_invalid_page_size(self):
        with self.assertRaises(ValueError):
            PhotoFeed(sample_source(), MasonryLayoutEngine(1), page_size=0)


if __name__ == "__main__":
    unittest.main()
