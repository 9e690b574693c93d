import pytest
from pydantic import ValidationError

from notedash.dashboard import RefreshRequest
from notedash.enums import SectionCode


class TestRefreshRequest:
    def test_defaults_to_full_refresh(self) -> None:
        request = RefreshRequest()

        assert request.section_codes == ()
        assert not request.is_partial
        assert not request.use_demo_data
        assert not request.force_load_all

    def test_codes_from_wire_and_long_names(self) -> None:
        request = RefreshRequest.model_validate(
            {"sectionCodes": ["OVERDUE", "today", "OVERDUE", "thisWeek"]}
        )

        assert request.section_codes == (
            SectionCode.OVERDUE,
            SectionCode.TODAY,
            SectionCode.THIS_WEEK,
        )
        assert request.is_partial

    def test_single_code_string(self) -> None:
        request = RefreshRequest.model_validate({"sectionCodes": "TB"})

        assert request.section_codes == (SectionCode.TIMEBLOCK,)

    def test_camel_case_flags(self) -> None:
        request = RefreshRequest.model_validate(
            {"useDemoData": True, "forceLoadAll": True}
        )

        assert request.use_demo_data
        assert request.force_load_all

    def test_unknown_code(self) -> None:
        with pytest.raises(ValidationError):
            _ = RefreshRequest.model_validate({"sectionCodes": ["NOPE"]})
