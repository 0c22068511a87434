import random

import pytest

from luckydraw.services.draw_engine import DrawEngine
from luckydraw.services.grouping import GroupingEngine
from luckydraw.services.participant_store import ParticipantStore
from luckydraw.services.session import LuckyDrawSession, SessionState


class ManualJob:
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.running = True
        self.fired = 0

    def stop(self):
        self.running = False


class ManualScheduler:
    """Fires periodic jobs only when the test says so."""

    def __init__(self):
        self.jobs = []

    def every(self, interval, callback):
        job = ManualJob(interval, callback)
        self.jobs.append(job)
        return job

    @property
    def active(self):
        return [j for j in self.jobs if j.running]

    def tick(self, times=1):
        for _ in range(times):
            for job in self.active:
                job.fired += 1
                job.callback()

    def run_until_idle(self, limit=10_000):
        while self.active and limit:
            self.tick()
            limit -= 1


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def engine(scheduler, rng):
    return DrawEngine(scheduler, rng=rng)


@pytest.fixture
def session(scheduler, rng):
    state = SessionState(
        store=ParticipantStore(),
        draw=DrawEngine(scheduler, rng=rng),
        grouping=GroupingEngine(rng=rng),
    )
    return LuckyDrawSession(state)
