"""Cache and state storage configuration models."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class CacheConfig(BaseModel):
    """Project cache configuration section.

    Attributes:
        max_age_hours: Age after which the cached project list is regenerated.
        path: Cache blob path (empty uses the data directory).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    max_age_hours: float = Field(default=1.0, ge=0)
    path: str = ""


class StateConfig(BaseModel):
    """State store configuration section.

    Attributes:
        path: SQLite database path (empty uses the data directory).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    path: str = ""
