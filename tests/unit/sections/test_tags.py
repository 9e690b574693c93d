from collections.abc import Callable

from notedash.enums import ParagraphType, SectionCode
from notedash.sections import (
    BuildContext,
    build_tag_section,
    build_tag_sections,
    tag_paragraphs,
)
from notedash.store import InMemoryRecordStore, Note


class TestTagParagraphs:
    def test_open_lines_with_tag(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        make_note: Callable[..., Note],
    ) -> None:
        record_store.add(
            make_note(
                "Home/Garden.md",
                lines=[
                    (ParagraphType.OPEN, "Order seeds #home"),
                    (ParagraphType.DONE, "Dig beds #home"),
                    (ParagraphType.OPEN, "Untagged line"),
                    (ParagraphType.CHECKLIST, "Gloves #home"),
                ],
            )
        )

        found = tag_paragraphs(make_context(), "#home")

        assert [p.content for p in found] == ["Order seeds #home", "Gloves #home"]
        assert found[0].note_title == "Garden"

    def test_tag_is_exempt_from_its_own_exclusion(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        make_note: Callable[..., Note],
    ) -> None:
        record_store.add(
            make_note(
                "Home/Gate.md",
                lines=[(ParagraphType.OPEN, "Fix gate #home #work")],
            )
        )
        ctx = make_context({"ignoreItemsWithTerms": "#home"})

        assert len(tag_paragraphs(ctx, "#home")) == 1
        assert tag_paragraphs(ctx, "#work") == []

    def test_future_lines_are_left_for_later(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        make_note: Callable[..., Note],
    ) -> None:
        record_store.add(
            make_note("20240518.md", lines=[(ParagraphType.OPEN, "Tomorrow #home")]),
            make_note("20240519.md", lines=[(ParagraphType.OPEN, "Sunday #home")]),
            make_note(
                "Home/Plan.md",
                lines=[
                    (ParagraphType.OPEN, "Later >2024-06-01 #home"),
                    (ParagraphType.OPEN, "Soon >2024-05-18 #home"),
                ],
            ),
        )

        with_tomorrow = tag_paragraphs(make_context(), "#home")
        without_tomorrow = tag_paragraphs(
            make_context({"showTomorrowSection": False}), "#home"
        )

        assert {p.content for p in with_tomorrow} == {
            "Tomorrow #home",
            "Soon >2024-05-18 #home",
        }
        assert without_tomorrow == []

    def test_disallowed_folders_skipped(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        make_note: Callable[..., Note],
    ) -> None:
        record_store.add(
            make_note("Work/Plan.md", lines=[(ParagraphType.OPEN, "Call #home")]),
            make_note("20240517.md", lines=[(ParagraphType.OPEN, "Today #home")]),
        )
        ctx = make_context(allowed_folders=frozenset({"Home"}))

        assert [p.content for p in tag_paragraphs(ctx, "#home")] == ["Today #home"]


class TestBuildTagSections:
    def test_one_section_per_shown_tag(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        make_note: Callable[..., Note],
    ) -> None:
        record_store.add(
            make_note(
                "Home/Notes.md",
                lines=[
                    (ParagraphType.OPEN, "Ask @jane"),
                    (ParagraphType.OPEN, "Paint #home"),
                ],
            )
        )
        ctx = make_context(
            {
                "tagsToShow": "#home, plain, @jane, #hidden",
                "showTagSection_#hidden": False,
            }
        )

        sections = build_tag_sections(ctx)

        assert [(s.id, s.name) for s in sections] == [
            ("12-0", "#home"),
            ("12-1", "@jane"),
        ]
        assert all(s.section_code is SectionCode.TAG for s in sections)
        assert sections[1].show_setting_name == "showTagSection_@jane"
        assert [i.id for i in sections[1].items] == ["12-1-0"]

    def test_no_tags(self, make_context: Callable[..., BuildContext]) -> None:
        assert build_tag_sections(make_context()) == []

    def test_sorted_and_truncated(
        self,
        record_store: InMemoryRecordStore,
        make_context: Callable[..., BuildContext],
        make_note: Callable[..., Note],
    ) -> None:
        record_store.add(
            make_note(
                "Home/List.md",
                lines=[
                    (ParagraphType.OPEN, "plain #home"),
                    (ParagraphType.OPEN, "!!! urgent #home"),
                    (ParagraphType.OPEN, "! minor #home"),
                ],
            )
        )
        ctx = make_context(
            {"overdueSortOrder": "priority", "maxItemsToShowInSection": 2}
        )

        section = build_tag_section(ctx, "#home", 0)

        assert [i.content for i in section.items] == [
            "!!! urgent #home",
            "! minor #home",
        ]
        assert section.total_count == 3
        assert section.description == "{count} item{s} ordered by priority"

    def test_empty_tag_section(self, make_context: Callable[..., BuildContext]) -> None:
        section = build_tag_section(make_context(), "#nothing", 3)

        assert section.id == "12-3"
        assert section.items == ()
        assert section.total_count == 0
