import logging
import os
import sys
from typing import Dict


def setup_logging(level: str = None):
    """
    Configure root and per-module logging.

    The global level comes from ``LOG_LEVEL`` (default INFO). Single modules
    can be tuned with ``LOG_LEVEL_<ALIAS>``:

    - STORE   -> luckydraw.services.participant_store
    - DRAW    -> luckydraw.services.draw_engine
    - GROUPS  -> luckydraw.services.grouping
    - IMPORT  -> luckydraw.services.csv_adapter
    - API     -> luckydraw.app
    - UVICORN -> uvicorn

    OFF/DISABLE silences a module.
    """
    log_format = '%(asctime)s - %(levelname)s - [%(name)s] - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    global_level_str = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    global_level = getattr(logging, global_level_str, logging.INFO)

    # force=True overrides whatever uvicorn configured first
    logging.basicConfig(
        level=global_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True
    )

    modules_map: Dict[str, str] = {
        "luckydraw.services.participant_store": "STORE",
        "luckydraw.services.draw_engine": "DRAW",
        "luckydraw.services.grouping": "GROUPS",
        "luckydraw.services.csv_adapter": "IMPORT",
        "luckydraw.app": "API",
        "uvicorn": "UVICORN",
        "uvicorn.access": "ACCESS",
    }

    configured_modules = []

    for module_name, env_suffix in modules_map.items():
        env_var_name = f"LOG_LEVEL_{env_suffix}"
        level_str = os.getenv(env_var_name)
        if not level_str:
            continue

        level_str = level_str.upper()
        logger = logging.getLogger(module_name)
        if level_str in ["OFF", "DISABLE", "FALSE", "NO", "0", "NONE"]:
            logger.setLevel(logging.CRITICAL + 1)
            configured_modules.append(f"{env_suffix}: OFF")
        else:
            value = getattr(logging, level_str, None)
            if isinstance(value, int):
                logger.setLevel(value)
                configured_modules.append(f"{env_suffix}: {level_str}")
            else:
                logging.warning(f"Ignoring invalid {env_var_name}={level_str!r}")

    logging.info(f"Log System Initialized. Global Level: {global_level_str}")
    if configured_modules:
        logging.info(f"Module Overrides: {', '.join(configured_modules)}")
