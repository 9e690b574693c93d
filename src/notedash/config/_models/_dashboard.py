# pyright: reportAny=false, reportExplicitAny=false
"""Dashboard configuration models.

``DashboardConfig`` is the ``[dashboard]`` TOML section. ``DashboardSettings``
is a typed, read-only view over a dashboard ConfigMap: the camelCase
key/value bag that perspectives snapshot and builders read.
"""

from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from notedash.enums import DisplayFinished, SectionCode, SortOrder
from notedash.utils._strings import split_csv

DEFAULT_MAX_ITEMS = 30

# Sections gated by a ``show<X>Section`` flag. TODAY and TAG are not listed:
# today is always shown and tags are gated per tag.
_SHOW_FLAGS: dict[SectionCode, str] = {
    SectionCode.YESTERDAY: "show_yesterday_section",
    SectionCode.TOMORROW: "show_tomorrow_section",
    SectionCode.LAST_WEEK: "show_last_week_section",
    SectionCode.THIS_WEEK: "show_week_section",
    SectionCode.THIS_MONTH: "show_month_section",
    SectionCode.THIS_QUARTER: "show_quarter_section",
    SectionCode.OVERDUE: "show_overdue_section",
    SectionCode.PRIORITY: "show_priority_section",
    SectionCode.PROJECT_REVIEW: "show_project_section",
    SectionCode.TIMEBLOCK: "show_timeblock_section",
}


class DashboardConfig(BaseModel):
    """Dashboard section of the application configuration.

    Attributes:
        timezone: IANA timezone used to decide what "today" is.
        default_file_extension: Extension of calendar-note files.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    timezone: str = "UTC"
    default_file_extension: str = "md"


class DashboardSettings(BaseModel):
    """Typed read-only view over a dashboard ConfigMap.

    Keys are read by their camelCase names. Keys without a field (for
    example ``showTagSection_#home`` or feature flags) are kept in
    ``model_extra``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    active_perspective_name: str = "-"
    included_folders: str = ""
    excluded_folders: str = ""
    tags_to_show: str = ""
    ignore_items_with_terms: str = ""
    ignore_checklist_items: bool = False
    separate_section_for_referenced_notes: bool = False
    overdue_sort_order: SortOrder = SortOrder.MOST_RECENT
    look_back_days_for_overdue: int = Field(default=0, ge=0)
    max_items_to_show_in_section: int = Field(default=DEFAULT_MAX_ITEMS, gt=0)
    timeblock_must_contain_string: str = ""
    display_finished: DisplayFinished = DisplayFinished.HIDE
    display_only_due: bool = False
    show_yesterday_section: bool = True
    show_tomorrow_section: bool = True
    show_last_week_section: bool = False
    show_week_section: bool = True
    show_month_section: bool = True
    show_quarter_section: bool = True
    show_overdue_section: bool = True
    show_priority_section: bool = True
    show_project_section: bool = True
    show_timeblock_section: bool = True

    @field_validator("overdue_sort_order", mode="before")
    @classmethod
    def _fallback_sort_order(cls, value: Any) -> Any:
        try:
            return SortOrder(value)
        except ValueError:
            return SortOrder.MOST_RECENT

    @field_validator("max_items_to_show_in_section", mode="before")
    @classmethod
    def _fallback_max_items(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            return DEFAULT_MAX_ITEMS
        return value

    @field_validator(
        "included_folders",
        "excluded_folders",
        "tags_to_show",
        "ignore_items_with_terms",
        mode="before",
    )
    @classmethod
    def _join_lists(cls, value: Any) -> Any:
        if isinstance(value, list | tuple):
            return ", ".join(str(part) for part in value)
        return value

    @classmethod
    def from_config_map(cls, values: Mapping[str, Any]) -> Self:
        """Build a view from a ConfigMap, dropping keys that fail validation.

        Args:
            values: The ConfigMap to read.

        Returns:
            A settings view. Invalid values are replaced by field defaults.
        """
        data = dict(values)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            for error in e.errors():
                loc = error.get("loc", ())
                if loc:
                    _ = data.pop(str(loc[0]), None)
                    _ = data.pop(to_camel(str(loc[0])), None)
            return cls.model_validate(data)

    @property
    def tags(self) -> list[str]:
        """Configured tags and mentions, in order."""
        return split_csv(self.tags_to_show)

    @property
    def included_folder_terms(self) -> list[str]:
        """Included folder terms."""
        return split_csv(self.included_folders)

    @property
    def excluded_folder_terms(self) -> list[str]:
        """Excluded folder terms."""
        return split_csv(self.excluded_folders)

    @property
    def ignore_terms(self) -> list[str]:
        """Terms that suppress matching lines."""
        return split_csv(self.ignore_items_with_terms)

    def extra(self, key: str, default: Any = None) -> Any:
        """Read a ConfigMap key that has no typed field."""
        return (self.model_extra or {}).get(key, default)

    def is_tag_shown(self, tag: str) -> bool:
        """Whether the section for ``tag`` is enabled."""
        return bool(self.extra(f"showTagSection_{tag}", default=True))

    def is_section_shown(self, code: SectionCode) -> bool:
        """Whether the builder for ``code`` should run at all.

        Today is never gated. Tag sections need at least one configured tag.
        """
        if code is SectionCode.TODAY:
            return True
        if code is SectionCode.TAG:
            return bool(self.tags)
        return bool(getattr(self, _SHOW_FLAGS[code]))
