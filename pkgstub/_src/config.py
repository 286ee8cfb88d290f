import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from pkgstub._src.constants import (
    DEFAULT_HOME,
    DEFAULT_LOG_LEVEL,
    HOME_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    SOURCE_ENV_VAR,
    LogLevel,
)


class Settings(BaseModel):
    """Runtime settings, read from the environment"""
    home: Path
    source: Optional[Path] = None
    log_level: LogLevel = LogLevel(DEFAULT_LOG_LEVEL)

    @classmethod
    def from_env(cls) -> "Settings":
        source = os.environ.get(SOURCE_ENV_VAR)
        return cls(
            home=Path(os.environ.get(HOME_ENV_VAR, DEFAULT_HOME)).expanduser(),
            source=Path(source).expanduser() if source else None,
            log_level=os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper(),
        )
