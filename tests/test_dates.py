import unittest
from datetime import date

from rhythmsfeed.dates import (
    find_date_range,
    is_date_key,
    normalize_range,
    normalize_single,
    yesterday_key,
)
from rhythmsfeed.model import ON_DEMAND, Dated, OnDemand


class TestNormalizeSingle(unittest.TestCase):
    def test_basic_date(self) -> None:
        self.assertEqual(normalize_single("10 Dec 2025"), "251210")

    def test_day_is_zero_padded(self) -> None:
        self.assertEqual(normalize_single(" 1 Aug 2023 "), "230801")

    def test_unknown_month_uses_sentinel(self) -> None:
        self.assertEqual(normalize_single("5 Foo 2024"), "240005")

    def test_unreadable_text_is_empty(self) -> None:
        for text in ("soon", "December 2025", "10 Dec", "", None, "on-demand"):
            self.assertEqual(normalize_single(text), "", text)

    def test_keys_sort_chronologically(self) -> None:
        texts = ["28 Feb 2024", "1 Mar 2024", "9 Mar 2024", "10 Mar 2024", "1 Jan 2025"]
        keys = [normalize_single(t) for t in texts]
        self.assertEqual(keys, sorted(keys))
        self.assertEqual(len(set(keys)), len(keys))


class TestNormalizeRange(unittest.TestCase):
    def test_range(self) -> None:
        self.assertEqual(normalize_range("1 Aug 2023 - 29 Aug 2023"), Dated("230801", "230829"))

    def test_range_with_extra_spaces(self) -> None:
        self.assertEqual(normalize_range("10 Dec 2025 -  14 Dec 2025"), Dated("251210", "251214"))

    def test_single_date_is_one_day_range(self) -> None:
        self.assertEqual(normalize_range("10 Dec 2025"), Dated("251210", "251210"))

    def test_on_demand_any_case(self) -> None:
        for text in ("on-demand", "On-Demand", "  ON-DEMAND "):
            self.assertIsInstance(normalize_range(text), OnDemand)

    def test_unreadable_is_on_demand(self) -> None:
        for text in ("soon", "", None, "10 December 2025", "1 Aug 2023 - later"):
            self.assertEqual(normalize_range(text), ON_DEMAND, text)

    def test_reversed_range_passes_through(self) -> None:
        self.assertEqual(normalize_range("5 Mar 2025 - 1 Mar 2025"), Dated("250305", "250301"))


class TestFindDateRange(unittest.TestCase):
    def test_range_in_page_text(self) -> None:
        text = "Moving Waves Weekend\nDates: 22 Apr 2022 - 25 Apr 2022\nVenue: Berlin"
        self.assertEqual(find_date_range(text), ("22 Apr 2022", "25 Apr 2022"))

    def test_range_without_spaces_around_hyphen(self) -> None:
        self.assertEqual(find_date_range("1 Aug 2023-29 Aug 2023"), ("1 Aug 2023", "29 Aug 2023"))

    def test_single_date_fallback(self) -> None:
        self.assertEqual(find_date_range("Starts 3 Jan 2026 at 7pm"), ("3 Jan 2026", "3 Jan 2026"))

    def test_nothing_found(self) -> None:
        self.assertIsNone(find_date_range("Available on-demand, start anytime"))
        self.assertIsNone(find_date_range(""))


class TestCutoff(unittest.TestCase):
    def test_yesterday_key(self) -> None:
        self.assertEqual(yesterday_key(date(2025, 12, 10)), "251209")

    def test_yesterday_crosses_year(self) -> None:
        self.assertEqual(yesterday_key(date(2026, 1, 1)), "251231")

    def test_yesterday_crosses_leap_day(self) -> None:
        self.assertEqual(yesterday_key(date(2024, 3, 1)), "240229")

    def test_default_is_a_key(self) -> None:
        self.assertTrue(is_date_key(yesterday_key()))
        self.assertFalse(is_date_key(""))
        self.assertFalse(is_date_key("2512"))


if __name__ == "__main__":
    unittest.main()
