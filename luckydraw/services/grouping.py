from __future__ import annotations

import logging
import random
from typing import Any, List, Optional, Sequence, TypeVar

from luckydraw.core.errors import InvalidConfigurationError
from luckydraw.services.participant_store import Participant

logger = logging.getLogger(__name__)

T = TypeVar("T")


def validate_group_size(value: Any) -> int:
    """Return ``value`` as a positive int or raise InvalidConfigurationError."""
    if isinstance(value, bool) or value is None:
        raise InvalidConfigurationError(f"Invalid group size: {value!r}")
    if isinstance(value, str):
        try:
            size = int(value.strip())
        except ValueError:
            raise InvalidConfigurationError(f"Group size must be a number, got {value!r}")
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidConfigurationError(f"Group size must be a whole number, got {value!r}")
        size = int(value)
    elif isinstance(value, int):
        size = value
    else:
        raise InvalidConfigurationError(f"Invalid group size: {value!r}")
    if size < 1:
        raise InvalidConfigurationError(f"Group size must be >= 1, got {size}")
    return size


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class GroupingEngine:
    """Random partition of every participant into groups of ``group_size``."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.groups: List[List[Participant]] = []

    def generate(self, participants: Sequence[Participant], group_size: Any) -> Optional[List[List[Participant]]]:
        size = validate_group_size(group_size)
        if not participants:
            logger.info("[Groups] no participants; grouping skipped")
            return None
        shuffled = list(participants)
        # random.shuffle is Fisher-Yates
        self.rng.shuffle(shuffled)
        self.groups = chunk(shuffled, size)
        logger.info(f"[Groups] {len(shuffled)} participant(s) into {len(self.groups)} group(s) of {size}")
        return self.groups

    def clear(self) -> None:
        self.groups = []
