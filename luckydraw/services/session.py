from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from luckydraw.services.csv_adapter import groups_to_csv, names_from_rows, read_rows
from luckydraw.services.draw_engine import DrawEngine
from luckydraw.services.grouping import GroupingEngine, validate_group_size
from luckydraw.services.participant_store import Participant, ParticipantStore

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    store: ParticipantStore
    draw: DrawEngine
    grouping: GroupingEngine
    auto_deduplicate: bool = True
    group_size: int = 3


class LuckyDrawSession:
    """
    Controller for one session. It is the only writer of its SessionState, so
    clearing the list can reset the derived history and groups with it.
    """

    def __init__(self, state: SessionState):
        self.state = state

    @property
    def store(self) -> ParticipantStore:
        return self.state.store

    @property
    def draw(self) -> DrawEngine:
        return self.state.draw

    @property
    def groups(self) -> List[List[Participant]]:
        return self.state.grouping.groups

    def _dedupe(self, dedupe: Optional[bool]) -> bool:
        return self.state.auto_deduplicate if dedupe is None else dedupe

    # ---------- Participants ----------
    def add_text(self, text: str, dedupe: Optional[bool] = None) -> int:
        return self.store.add_from_lines(text, dedupe=self._dedupe(dedupe))

    def add_rows(self, rows, dedupe: Optional[bool] = None) -> int:
        return self.store.add_from_rows(rows, dedupe=self._dedupe(dedupe))

    def add_csv(self, data: Union[bytes, str], dedupe: Optional[bool] = None,
                encoding: str = "utf-8", sep: str = ",") -> int:
        names = names_from_rows(read_rows(data, encoding=encoding, sep=sep))
        return self.store.add_names(names, dedupe=self._dedupe(dedupe))

    def deduplicate(self) -> int:
        return self.store.deduplicate()

    def remove(self, participant_id: str) -> bool:
        # history keeps past winners even after they leave the list
        return self.store.remove(participant_id)

    def clear(self) -> None:
        count = self.store.clear()
        self.draw.clear_history()
        self.state.grouping.clear()
        logger.info(f"[Store] cleared {count} participant(s), history and groups")

    def set_auto_deduplicate(self, value: bool) -> None:
        self.state.auto_deduplicate = bool(value)

    # ---------- Draw ----------
    def set_allow_repeat(self, value: bool) -> None:
        self.draw.allow_repeat = bool(value)

    def eligible(self) -> List[Participant]:
        return self.draw.eligible(self.store.snapshot())

    def start_draw(self) -> bool:
        return self.draw.start_draw(self.store.snapshot())

    def clear_history(self) -> None:
        self.draw.clear_history()

    # ---------- Groups ----------
    def generate_groups(self, group_size: Any = None) -> Optional[List[List[Participant]]]:
        if group_size is None:
            size = self.state.group_size
        else:
            size = validate_group_size(group_size)
            self.state.group_size = size
        return self.state.grouping.generate(self.store.snapshot(), size)

    def clear_groups(self) -> None:
        self.state.grouping.clear()

    def export_csv(self, sep: str = ",") -> str:
        return groups_to_csv(self.groups, sep=sep)

    def close(self) -> None:
        self.draw.close()
