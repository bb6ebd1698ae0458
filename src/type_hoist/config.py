import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_DEFAULT_EXCLUDE = "node_modules,.git,dist,build"


def _split_dirs(value: str) -> frozenset[str]:
    return frozenset(part.strip() for part in value.split(",") if part.strip())


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = "WARNING"
    max_fix_passes: int = Field(default=10, ge=1)
    exclude_dirs: frozenset[str] = _split_dirs(_DEFAULT_EXCLUDE)


def get_settings() -> Settings:
    return Settings(
        log_level=os.getenv("TYPE_HOIST_LOG_LEVEL", "WARNING").upper(),
        max_fix_passes=int(os.getenv("TYPE_HOIST_MAX_PASSES", "10")),
        exclude_dirs=_split_dirs(os.getenv("TYPE_HOIST_EXCLUDE", _DEFAULT_EXCLUDE)),
    )
