from os import getenv, path
from typing import Optional

from pydantic import BaseModel
from dotenv import load_dotenv

# =====================================================
# Load .env from the luckydraw/ package folder
# =====================================================
BASE_DIR = path.dirname(path.abspath(__file__))        # luckydraw/core
ROOT_DIR = path.dirname(BASE_DIR)                      # luckydraw/
ENV_PATH = path.join(ROOT_DIR, ".env")                 # luckydraw/.env
load_dotenv(ENV_PATH)
# =====================================================


def _env_bool(name: str, default: bool) -> bool:
    raw = getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> Optional[int]:
    raw = getenv(name, "").strip()
    return int(raw) if raw else None


class Settings(BaseModel):
    # Reveal timing (milliseconds)
    draw_duration_ms: int = int(getenv("DRAW_DURATION_MS", "2000"))
    draw_interval_ms: int = int(getenv("DRAW_INTERVAL_MS", "50"))

    # Session defaults
    default_group_size: int = int(getenv("DEFAULT_GROUP_SIZE", "3"))
    auto_deduplicate: bool = _env_bool("AUTO_DEDUPLICATE", True)
    allow_repeat: bool = _env_bool("ALLOW_REPEAT", False)

    # CSV import/export
    csv_sep: str = getenv("CSV_SEP", ",")
    csv_encoding: str = getenv("CSV_ENCODING", "utf-8")
    export_filename: str = getenv("EXPORT_FILENAME", "groups.csv")

    log_level: str = getenv("LOG_LEVEL", "INFO")
    rng_seed: Optional[int] = _env_int("RNG_SEED")


settings = Settings()


def make_session(scheduler=None, rng=None):
    """Build a fresh session wired with the configured timings and defaults."""
    import random

    from luckydraw.services.draw_engine import DrawEngine
    from luckydraw.services.grouping import GroupingEngine
    from luckydraw.services.participant_store import ParticipantStore
    from luckydraw.services.scheduler import LoopScheduler
    from luckydraw.services.session import LuckyDrawSession, SessionState

    rng = rng or random.Random(settings.rng_seed)
    state = SessionState(
        store=ParticipantStore(),
        draw=DrawEngine(
            scheduler or LoopScheduler(),
            duration_ms=settings.draw_duration_ms,
            interval_ms=settings.draw_interval_ms,
            allow_repeat=settings.allow_repeat,
            rng=rng,
        ),
        grouping=GroupingEngine(rng=rng),
        auto_deduplicate=settings.auto_deduplicate,
        group_size=settings.default_group_size,
    )
    return LuckyDrawSession(state)
