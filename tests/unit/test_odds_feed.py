# tests/unit/test_odds_feed.py
import asyncio

import pytest
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from fastmoney.odds_feed import LIVE_ODDS_EVENT, SAMPLE_ODDS, OddsFeed


@pytest.fixture
def scheduler():
    # Sin arrancar: los jobs quedan pendientes y se pueden inspeccionar
    return AsyncIOScheduler()


@pytest.fixture
def feed(scheduler):
    return OddsFeed(scheduler, SAMPLE_ODDS, interval_seconds=5)


class Collector:
    def __init__(self):
        self.events = []

    async def __call__(self, event, data):
        self.events.append((event, data))


class TestOddsFeed:

    def test_get_odds_is_stable(self, feed):
        first = feed.get_odds()
        assert first == feed.get_odds()
        assert first == [
            {"match": "India vs Australia", "odds": {"India": 1.8, "Australia": 2.0}},
            {"match": "Real Madrid vs Barcelona", "odds": {"Madrid": 1.6, "Barca": 2.2}},
        ]

    def test_callers_cannot_mutate_feed(self, feed):
        odds = feed.get_odds()
        odds[0]["odds"]["India"] = 99.0
        odds.append({"match": "x", "odds": {}})
        assert feed.get_odds()[0]["odds"]["India"] == 1.8
        assert len(feed.get_odds()) == 2

    def test_subscribe_schedules_one_interval_job(self, feed, scheduler):
        job = feed.subscribe("abc", Collector())
        assert job.id == "live-odds-abc"
        assert job.trigger.interval.total_seconds() == 5
        assert [j.id for j in scheduler.get_jobs()] == ["live-odds-abc"]
        assert feed.listener_count == 1
        assert feed.is_subscribed("abc")

    def test_unsubscribe_cancels_exactly_once(self, feed, scheduler):
        feed.subscribe("abc", Collector())
        feed.subscribe("def", Collector())

        assert feed.unsubscribe("abc") is True
        assert feed.unsubscribe("abc") is False
        assert [j.id for j in scheduler.get_jobs()] == ["live-odds-def"]
        assert feed.listener_count == 1

    def test_push_emits_live_odds(self, feed):
        collector = Collector()
        asyncio.run(feed.push(collector))
        assert collector.events == [(LIVE_ODDS_EVENT, feed.get_odds())]

    def test_no_events_after_unsubscribe(self):
        async def scenario():
            scheduler = AsyncIOScheduler()
            feed = OddsFeed(scheduler, SAMPLE_ODDS, interval_seconds=0.02)
            collector = Collector()
            scheduler.start()
            try:
                feed.subscribe("abc", collector)
                while not collector.events:
                    await asyncio.sleep(0.01)
                feed.unsubscribe("abc")
                # deja terminar un envío que ya estuviera en vuelo
                await asyncio.sleep(0.01)
                delivered = len(collector.events)
                await asyncio.sleep(0.1)
                return delivered, len(collector.events)
            finally:
                scheduler.shutdown(wait=False)

        delivered, after = asyncio.run(asyncio.wait_for(scenario(), timeout=5))
        assert delivered >= 1
        assert after == delivered
