import unittest

from helpers import FakeSession, page
from rhythmsfeed.enrich import enrich_on_demand, fetch_event_dates
from rhythmsfeed.model import ON_DEMAND, Dated, Event


def on_demand(name: str, url=None) -> Event:
    return Event(name=name, url=url, date_state=ON_DEMAND)


class TestFetchEventDates(unittest.TestCase):
    def test_range_from_detail_page(self) -> None:
        session = FakeSession({"u": page("<p>When:</p><p>1 Aug 2023 - 29 Aug 2023</p>")})
        self.assertEqual(fetch_event_dates(session, "u"), ("1 Aug 2023", "29 Aug 2023"))

    def test_no_date_on_page(self) -> None:
        session = FakeSession({"u": page("Start whenever you like")})
        self.assertIsNone(fetch_event_dates(session, "u"))


class TestEnrichOnDemand(unittest.TestCase):
    def test_sequential_visits_with_delays_between(self) -> None:
        urls = [f"https://x/e{i}" for i in range(3)]
        session = FakeSession({u: page(f"{i + 1} Sep 2030") for i, u in enumerate(urls)})
        events = [on_demand(f"E{i}", u) for i, u in enumerate(urls)]

        out = enrich_on_demand(events, session, delay_seconds=1.0, sleep=session.sleep)

        self.assertEqual(
            session.log,
            [
                ("goto", urls[0]),
                ("sleep", 1.0),
                ("goto", urls[1]),
                ("sleep", 1.0),
                ("goto", urls[2]),
            ],
        )
        self.assertEqual([e.date_state for e in out], [Dated("300901", "300901"), Dated("300902", "300902"), Dated("300903", "300903")])

    def test_only_on_demand_events_with_url_are_visited(self) -> None:
        dated = Event(name="Dated", url="https://x/d", date_state=Dated("300101", "300102"))
        no_url = on_demand("No url")
        target = on_demand("Target", "https://x/t")
        session = FakeSession({"https://x/t": page("5 Oct 2030 - 7 Oct 2030")})

        out = enrich_on_demand([dated, no_url, target], session, sleep=session.sleep)

        self.assertEqual(session.visits, ["https://x/t"])
        self.assertNotIn("sleep", [k for k, _ in session.log])
        self.assertEqual([e.name for e in out], ["Dated", "No url", "Target"])
        self.assertEqual(out[0], dated)
        self.assertEqual(out[1], no_url)
        self.assertEqual(out[2].date_state, Dated("301005", "301007"))

    def test_failure_keeps_event_on_demand_and_continues(self) -> None:
        session = FakeSession({"https://x/ok": page("12 Nov 2030")}, failing={"https://x/bad"})
        events = [on_demand("Bad", "https://x/bad"), on_demand("Ok", "https://x/ok")]

        out = enrich_on_demand(events, session, sleep=session.sleep)

        self.assertEqual(session.visits, ["https://x/bad", "https://x/ok"])
        self.assertTrue(out[0].is_on_demand)
        self.assertEqual(out[1].date_state, Dated("301112", "301112"))

    def test_unexpected_session_error_does_not_abort_batch(self) -> None:
        class ClosedPageSession(FakeSession):
            def inner_text(self) -> str:
                if self._url == "https://x/gone":
                    raise RuntimeError("Target page, context or browser has been closed")
                return super().inner_text()

        session = ClosedPageSession({"https://x/gone": page(""), "https://x/ok": page("2 Feb 2031")})
        events = [on_demand("Gone", "https://x/gone"), on_demand("Ok", "https://x/ok")]

        out = enrich_on_demand(events, session, sleep=session.sleep)

        self.assertEqual(session.visits, ["https://x/gone", "https://x/ok"])
        self.assertTrue(out[0].is_on_demand)
        self.assertEqual(out[1].date_state, Dated("310202", "310202"))

    def test_page_without_dates_stays_on_demand(self) -> None:
        session = FakeSession({"https://x/a": page("On-Demand course, start anytime")})
        out = enrich_on_demand([on_demand("A", "https://x/a")], session, sleep=session.sleep)
        self.assertTrue(out[0].is_on_demand)

    def test_input_is_not_mutated(self) -> None:
        session = FakeSession({"https://x/a": page("1 Jan 2031")})
        events = [on_demand("A", "https://x/a")]
        out = enrich_on_demand(events, session, sleep=session.sleep)
        self.assertTrue(events[0].is_on_demand)
        self.assertFalse(out[0].is_on_demand)
        self.assertIsNot(out, events)


if __name__ == "__main__":
    unittest.main()
