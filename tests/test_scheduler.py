import asyncio
import random

import pytest

from luckydraw.services.draw_engine import DrawEngine
from luckydraw.services.participant_store import Participant
from luckydraw.services.scheduler import LoopScheduler, PeriodicJob


def test_job_repeats_until_stopped():
    async def scenario():
        calls = []
        job = LoopScheduler().every(0.001, lambda: calls.append(1))
        while len(calls) < 3:
            await asyncio.sleep(0.001)
        job.stop()
        seen = len(calls)
        await asyncio.sleep(0.01)
        return job, seen, len(calls)

    job, seen, total = asyncio.run(scenario())
    assert not job.running
    assert total == seen


def test_callback_can_stop_its_own_job():
    async def scenario():
        calls = []
        holder = {}

        def cb():
            calls.append(1)
            if len(calls) == 2:
                holder["job"].stop()

        holder["job"] = LoopScheduler().every(0.001, cb)
        await asyncio.sleep(0.05)
        return len(calls)

    assert asyncio.run(scenario()) == 2


def test_failing_callback_stops_the_job():
    async def scenario():
        loop = asyncio.get_running_loop()
        errors = []
        loop.set_exception_handler(lambda _loop, ctx: errors.append(ctx.get("exception")))

        def boom():
            raise RuntimeError("boom")

        job = PeriodicJob(loop, 0.001, boom)
        job.start()
        await asyncio.sleep(0.02)
        return job, errors

    job, errors = asyncio.run(scenario())
    assert not job.running
    assert len(errors) == 1 and isinstance(errors[0], RuntimeError)


def test_every_needs_a_running_loop():
    with pytest.raises(RuntimeError):
        LoopScheduler().every(0.01, lambda: None)


def test_real_reveal_on_event_loop():
    async def scenario():
        engine = DrawEngine(LoopScheduler(), duration_ms=20, interval_ms=5, rng=random.Random(0))
        pool = [Participant("a", "Ana"), Participant("b", "Luis")]
        assert engine.start_draw(pool)
        while engine.in_progress:
            await asyncio.sleep(0.005)
        return engine

    engine = asyncio.run(scenario())
    assert len(engine.history) == 1
    assert engine.history[0].id in {"a", "b"}
    assert engine._job is None
