from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Sequence

from luckydraw.services.utils import clean_names, names_from_text, new_participant_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Participant:
    id: str
    name: str


class ParticipantStore:
    """
    Ordered list of participants for one session. Ids are unique; names
    only when the caller asks for deduplication.
    """

    def __init__(self, id_factory: Callable[[], str] = new_participant_id):
        self._id_factory = id_factory
        self._participants: List[Participant] = []
        self._ids: set = set()

    def __len__(self) -> int:
        return len(self._participants)

    def __iter__(self) -> Iterator[Participant]:
        return iter(list(self._participants))

    @property
    def participants(self) -> List[Participant]:
        return list(self._participants)

    def snapshot(self) -> tuple:
        return tuple(self._participants)

    def _next_id(self) -> str:
        pid = self._id_factory()
        while pid in self._ids:
            pid = self._id_factory()
        return pid

    # ---------- Adding ----------
    def add_names(self, names: Iterable[Any], dedupe: bool = False) -> int:
        """Append cleaned ``names`` in order; returns how many were added."""
        seen = {p.name for p in self._participants} if dedupe else None
        added = 0
        for name in clean_names(names):
            if seen is not None:
                if name in seen:
                    continue
                seen.add(name)
            pid = self._next_id()
            self._ids.add(pid)
            self._participants.append(Participant(id=pid, name=name))
            added += 1
        if added:
            logger.info(f"[Store] added {added} participant(s), total={len(self)}")
        return added

    def add_from_lines(self, text: str, dedupe: bool = False) -> int:
        return self.add_names(names_from_text(text), dedupe=dedupe)

    def add_from_rows(self, rows: Iterable[Sequence[Any]], dedupe: bool = False) -> int:
        flat = [cell for row in rows if row for cell in row]
        return self.add_names(flat, dedupe=dedupe)

    # ---------- Removal ----------
    def deduplicate(self) -> int:
        """Keep the first participant of every name; returns how many were dropped."""
        seen = set()
        unique: List[Participant] = []
        for p in self._participants:
            if p.name in seen:
                continue
            seen.add(p.name)
            unique.append(p)
        removed = len(self._participants) - len(unique)
        self._participants = unique
        self._ids = {p.id for p in unique}
        if removed:
            logger.info(f"[Store] deduplicate dropped {removed} participant(s)")
        return removed

    def remove(self, participant_id: str) -> bool:
        if participant_id not in self._ids:
            return False
        self._participants = [p for p in self._participants if p.id != participant_id]
        self._ids.discard(participant_id)
        return True

    def clear(self) -> int:
        count = len(self._participants)
        self._participants = []
        self._ids = set()
        return count
