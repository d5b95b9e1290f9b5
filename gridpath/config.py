# gridpath/config.py
#!/usr/bin/env python3
"""
Runtime settings.

- ENV:  GRIDPATH_SPEED, GRIDPATH_ALGO, GRIDPATH_ROWS, GRIDPATH_COLS, GRIDPATH_LOG_LEVEL
- CLI:  --speed=, --algo=, --rows=, --cols=, --log-level=   (override ENV)

Bad values are logged and replaced by the default.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from gridpath.core.grid import DEFAULT_COLS, DEFAULT_ROWS
from gridpath.core.playback import DEFAULT_SPEED, SPEED_MAX, SPEED_MIN
from gridpath.core.search import ALGORITHMS

logger = logging.getLogger(__name__)

ENV_PREFIX = "GRIDPATH_"
KEYS = ("speed", "algo", "rows", "cols", "log_level")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    speed: int = DEFAULT_SPEED
    algorithm: str = "dijkstra"
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    log_level: str = "INFO"


def _raw_values(argv: List[str], env: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for key in KEYS:
        v = env.get(ENV_PREFIX + key.upper())
        if v is not None:
            raw[key] = v
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        k, v = arg[2:].split("=", 1)
        k = k.replace("-", "_").lower()
        if k in KEYS:
            raw[k] = v
    return raw


def _int_in_range(key: str, value: str, lo: int, hi: int, default: int) -> int:
    try:
        n = int(value)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", key, value, default)
        return default
    if not lo <= n <= hi:
        logger.warning("%s=%d outside %d..%d, using %d", key, n, lo, hi, default)
        return default
    return n


def resolve_settings(argv: Optional[List[str]] = None,
                     env: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env
    raw = _raw_values(argv, env)
    d = Settings()

    speed = d.speed
    if "speed" in raw:
        speed = _int_in_range("speed", raw["speed"], SPEED_MIN, SPEED_MAX, d.speed)

    algorithm = d.algorithm
    if "algo" in raw:
        a = raw["algo"].lower()
        if a in ALGORITHMS:
            algorithm = a
        else:
            logger.warning("unknown algorithm %r, using %s", raw["algo"], d.algorithm)

    rows = _int_in_range("rows", raw["rows"], 3, 200, d.rows) if "rows" in raw else d.rows
    cols = _int_in_range("cols", raw["cols"], 3, 200, d.cols) if "cols" in raw else d.cols

    log_level = d.log_level
    if "log_level" in raw:
        lv = raw["log_level"].upper()
        if lv in LOG_LEVELS:
            log_level = lv
        else:
            logger.warning("unknown log level %r, using %s", raw["log_level"], d.log_level)

    return Settings(speed=speed, algorithm=algorithm, rows=rows, cols=cols, log_level=log_level)
