"""Single-winner draw with a timed reveal."""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence

from luckydraw.core.errors import InvalidConfigurationError
from luckydraw.services.participant_store import Participant

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 2000
DEFAULT_INTERVAL_MS = 50


class DrawEngine:
    """
    Picks one winner at a time from a snapshot of the participant list.

    ``start_draw`` fixes the eligible set, then a periodic job shows a random
    eligible name on every tick. The last tick samples the winner once more,
    independently of what was on screen, and puts it at the front of
    ``history``.

    Parameters
    ----------
    scheduler :
        Object with ``every(interval_seconds, callback)`` returning a job
        that exposes ``stop()``. See :class:`LoopScheduler`.
    duration_ms, interval_ms : int
        Total reveal time and tick period. 2000/50 gives 40 ticks.
    allow_repeat : bool
        When false, anybody already in ``history`` is not eligible.
    rng : random.Random, optional
        Source of randomness; a fresh ``random.Random()`` by default.
    on_display : callable, optional
        Called with ``(participant, final)`` every time the display changes.
    """

    def __init__(
        self,
        scheduler,
        *,
        duration_ms: int = DEFAULT_DURATION_MS,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        allow_repeat: bool = False,
        rng: Optional[random.Random] = None,
        on_display: Optional[Callable[[Participant, bool], None]] = None,
    ) -> None:
        if interval_ms <= 0 or duration_ms <= 0:
            raise InvalidConfigurationError("duration_ms and interval_ms must be positive")
        self._scheduler = scheduler
        self.duration_ms = duration_ms
        self.interval_ms = interval_ms
        self.steps = max(1, duration_ms // interval_ms)
        self.allow_repeat = allow_repeat
        self.rng = rng or random.Random()
        self.on_display = on_display

        self.history: List[Participant] = []
        self.in_progress = False
        self.current_display: Optional[Participant] = None

        self._job = None
        self._pool: List[Participant] = []
        self._counter = 0

    # ---------- Derived state ----------
    def eligible(self, participants: Sequence[Participant]) -> List[Participant]:
        if self.allow_repeat:
            return list(participants)
        drawn = {h.id for h in self.history}
        return [p for p in participants if p.id not in drawn]

    @property
    def status(self) -> str:
        if self.in_progress:
            return "choosing"
        if self.current_display is not None:
            return "winner"
        return "idle"

    @property
    def last_winner(self) -> Optional[Participant]:
        return self.history[0] if self.history else None

    # ---------- Draw ----------
    def start_draw(self, participants: Sequence[Participant]) -> bool:
        """Begin a reveal. Returns False (and does nothing) when busy or nobody is eligible."""
        if self.in_progress:
            return False
        pool = self.eligible(participants)
        if not pool:
            logger.info("[Draw] nobody eligible; draw skipped")
            return False

        self._pool = pool
        self._counter = 0
        self.in_progress = True
        self.current_display = None
        logger.info(f"[Draw] started with {len(pool)} eligible participant(s)")
        self._job = self._scheduler.every(self.interval_ms / 1000.0, self._tick)
        return True

    def _pick(self) -> Participant:
        return self._pool[self.rng.randrange(len(self._pool))]

    def _publish(self, participant: Participant, final: bool) -> None:
        self.current_display = participant
        if self.on_display is not None:
            self.on_display(participant, final)

    def _tick(self) -> None:
        if not self.in_progress:
            return
        try:
            self._publish(self._pick(), False)
            self._counter += 1
            if self._counter >= self.steps:
                self._finish()
        except Exception:
            self._abort()
            raise

    def _finish(self) -> None:
        self._stop_job()
        winner = self._pick()
        self.history.insert(0, winner)
        self.in_progress = False
        self._pool = []
        self._publish(winner, True)
        logger.info(f"[Draw] winner: {winner.name} ({winner.id})")

    def _stop_job(self) -> None:
        if self._job is not None:
            self._job.stop()
            self._job = None

    def clear_history(self) -> None:
        self.history = []

    def _abort(self) -> None:
        self._stop_job()
        self.in_progress = False
        self._pool = []
        # a flicker that never won must not show up as the winner
        self.current_display = self.last_winner

    def close(self) -> None:
        """Drop any running reveal without committing a winner."""
        if self.in_progress:
            logger.warning("[Draw] engine closed during a reveal; no winner committed")
            self._abort()
        else:
            self._stop_job()
