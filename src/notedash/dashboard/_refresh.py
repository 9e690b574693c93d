"""Refresh request model."""

from collections.abc import Iterable
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from notedash.enums import SectionCode


class RefreshRequest(BaseModel):
    """Which sections to rebuild.

    Codes may be given as wire codes (``"OVERDUE"``), long names
    (``"overdue"``) or ``SectionCode`` members. Repeats are dropped.

    Attributes:
        section_codes: Codes to rebuild. Empty means every section.
        use_demo_data: Build from the fixed demo corpus.
        force_load_all: Include the slow corpus scans in a full refresh.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    section_codes: tuple[SectionCode, ...] = ()
    use_demo_data: bool = False
    force_load_all: bool = False

    @field_validator("section_codes", mode="before")
    @classmethod
    def _coerce_codes(cls, value: object) -> object:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, Iterable):
            return value
        codes: list[SectionCode] = []
        for raw in value:
            code = SectionCode(raw)
            if code not in codes:
                codes.append(code)
        return tuple(codes)

    @property
    def is_partial(self) -> bool:
        """Whether only some sections were requested."""
        return bool(self.section_codes)
