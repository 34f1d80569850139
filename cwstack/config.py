"""Settings for the ``cwstack`` command-line tools.

The library itself reads no configuration; only the CLI does.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from cwstack.result import Err, Ok, Result

LOG_LEVEL_VAR = "CWSTACK_LOG_LEVEL"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]

    @classmethod
    def from_env(cls) -> Result["Settings", Exception]:
        """Read settings from the environment, after loading the nearest ``.env`` above the cwd."""
        load_dotenv(find_dotenv(usecwd=True))
        raw = os.getenv(LOG_LEVEL_VAR)

        match raw:
            case None:
                return Ok(cls())
            case str(level) if level.strip().upper() in _LEVELS:
                return Ok(cls(log_level=level.strip().upper()))
            case _:
                return Err(
                    ValueError(
                        f"{LOG_LEVEL_VAR}={raw!r} is not one of {', '.join(_LEVELS)}"
                    )
                )
