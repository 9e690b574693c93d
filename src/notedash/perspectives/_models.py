# pyright: reportAny=false, reportExplicitAny=false
"""Perspective definitions."""

from typing import Any, ClassVar, Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_PERSPECTIVE_NAME: Final = "-"
MODIFIED_MARKER: Final = "*"


class PerspectiveDef(BaseModel):
    """A named snapshot of dashboard settings.

    Attributes:
        name: Unique name. ``-`` is the default perspective.
        is_modified: Settings changed since the last save while active.
        settings_snapshot: The saved ConfigMap, already cleaned of
            transient keys.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: str
    is_modified: bool = False
    settings_snapshot: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices(
            "settingsSnapshot", "dashboardSettings", "settings_snapshot"
        ),
    )

    @property
    def is_default(self) -> bool:
        """Whether this is the default perspective."""
        return self.name == DEFAULT_PERSPECTIVE_NAME

    @property
    def display_name(self) -> str:
        """Name with the modification marker, never marked for the default."""
        if self.is_modified and not self.is_default:
            return f"{self.name}{MODIFIED_MARKER}"
        return self.name


DEFAULT_PERSPECTIVES: Final[tuple[PerspectiveDef, ...]] = (
    PerspectiveDef(name=DEFAULT_PERSPECTIVE_NAME),
    PerspectiveDef(
        name="Home",
        settings_snapshot={
            "includedFolders": "Home, NotePlan",
            "excludedFolders": "Readwise 📚, Saved Searches, Work",
            "ignoreItemsWithTerms": "#test, @church",
        },
    ),
    PerspectiveDef(
        name="Work",
        settings_snapshot={
            "includedFolders": "Work, CCC, Ministry",
            "excludedFolders": "Readwise 📚, Saved Searches, Home",
            "ignoreItemsWithTerms": "#test, @home",
        },
    ),
)
