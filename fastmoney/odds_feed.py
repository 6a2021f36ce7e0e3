"""
Cuotas en vivo.

``OddsFeed`` guarda una lista inmutable de partidos y, por cada listener
conectado, un job de intervalo en el scheduler de la app que le reenvía la
lista. El job se elimina al desconectarse.
"""
import logging
from typing import Awaitable, Callable, Dict, List, Sequence

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)

LIVE_ODDS_EVENT = "liveOdds"

# Cuotas de muestra del sportsbook
SAMPLE_ODDS = (
    {"match": "India vs Australia", "odds": {"India": 1.8, "Australia": 2.0}},
    {"match": "Real Madrid vs Barcelona", "odds": {"Madrid": 1.6, "Barca": 2.2}},
)

Emitter = Callable[[str, List[dict]], Awaitable[None]]


class OddsFeed:
    def __init__(self, scheduler: BaseScheduler, odds: Sequence[dict] = SAMPLE_ODDS,
                 interval_seconds: float = 5):
        self._scheduler = scheduler
        self._odds = tuple(
            {"match": item["match"], "odds": dict(item["odds"])} for item in odds
        )
        self._interval_seconds = interval_seconds
        self._jobs: Dict[str, str] = {}

    def get_odds(self) -> List[dict]:
        """Copia de la lista estática (los llamadores no pueden mutar el feed)."""
        return [{"match": item["match"], "odds": dict(item["odds"])} for item in self._odds]

    @property
    def listener_count(self) -> int:
        return len(self._jobs)

    def is_subscribed(self, listener_id: str) -> bool:
        return listener_id in self._jobs

    def subscribe(self, listener_id: str, emit: Emitter):
        """Programa el envío periódico de ``liveOdds`` a un listener."""
        job_id = f"live-odds-{listener_id}"
        job = self._scheduler.add_job(
            self.push,
            IntervalTrigger(seconds=self._interval_seconds),
            args=[emit],
            id=job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._jobs[listener_id] = job_id
        logger.info("Listener %s suscrito (%d activos)", listener_id, self.listener_count)
        return job

    def unsubscribe(self, listener_id: str) -> bool:
        """Cancela el job del listener. Devuelve False si ya estaba cancelado."""
        job_id = self._jobs.pop(listener_id, None)
        if job_id is None:
            return False
        try:
            self._scheduler.remove_job(job_id)
        except JobLookupError:
            # El scheduler ya se apagó y se llevó el job
            pass
        logger.info("Listener %s desuscrito (%d activos)", listener_id, self.listener_count)
        return True

    async def push(self, emit: Emitter) -> None:
        await emit(LIVE_ODDS_EVENT, self.get_odds())
