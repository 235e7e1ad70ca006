"""
Unit Tests for Knowledge-Base Module Selection
"""

from pathlib import Path

import pytest

from axiom.core.enums import PaperType
from axiom.core.exceptions import InvalidPaperTypeError
from axiom.detection.modules import (
    CORE_INSTRUCTIONS_FILE,
    MODULE_FILES,
    MODULE_SEPARATOR,
    load_knowledge_document,
    load_modules_for_type,
    load_paper_types_explained,
    load_writing_workflow,
    parse_paper_type,
)


class TestParsePaperType:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("qualitative", PaperType.QUALITATIVE),
            (" Case_Report ", PaperType.CASE_REPORT),
            (PaperType.GENERIC, PaperType.GENERIC),
        ],
    )
    def test_valid_values(self, value, expected: PaperType) -> None:
        assert parse_paper_type(value) == expected

    @pytest.mark.parametrize("value", ["rct", "", None, 7])
    def test_invalid_values_raise(self, value) -> None:
        with pytest.raises(InvalidPaperTypeError) as exc_info:
            parse_paper_type(value)
        assert exc_info.value.details == {"value": value}


class TestModuleTable:
    @pytest.mark.parametrize("paper_type", list(PaperType))
    def test_core_instructions_always_first(self, paper_type: PaperType) -> None:
        files = MODULE_FILES[paper_type]
        assert files[0] == CORE_INSTRUCTIONS_FILE
        assert len(files) == 2

    def test_case_report_module(self) -> None:
        assert MODULE_FILES[PaperType.CASE_REPORT][1] == "07_MODULE_CASE_REPORT.md"


class TestLoadModules:
    """Tests for loading module files from disk."""

    def test_loads_and_joins(self, knowledge_base: Path) -> None:
        loaded = load_modules_for_type(PaperType.QUANTITATIVE_EXPERIMENTAL, knowledge_base)
        assert loaded.files == [CORE_INSTRUCTIONS_FILE, "01_MODULE_QUANTITATIVE_EXPERIMENTAL.md"]
        assert loaded.content == "CORE INSTRUCTIONS" + MODULE_SEPARATOR + "RCT MODULE"

    def test_uses_configured_path(self, knowledge_base: Path) -> None:
        loaded = load_modules_for_type(PaperType.GENERIC)
        assert loaded.content.endswith("GENERIC MODULE")

    def test_missing_file_skipped_but_listed(
        self, knowledge_base: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        loaded = load_modules_for_type(PaperType.OBSERVATIONAL, knowledge_base)
        assert loaded.files == [CORE_INSTRUCTIONS_FILE, "02_MODULE_OBSERVATIONAL.md"]
        assert loaded.content == "CORE INSTRUCTIONS"
        assert "02_MODULE_OBSERVATIONAL.md" in caplog.text

    def test_missing_directory_gives_empty_content(self, tmp_path: Path) -> None:
        loaded = load_modules_for_type(PaperType.QUALITATIVE, tmp_path / "absent")
        assert loaded.content == ""
        assert len(loaded.files) == 2


class TestKnowledgeDocuments:
    def test_writing_workflow(self, knowledge_base: Path) -> None:
        assert load_writing_workflow(knowledge_base) == "WORKFLOW"

    def test_missing_document(self, knowledge_base: Path) -> None:
        assert load_paper_types_explained(knowledge_base) == ""
        assert load_knowledge_document("nope.md") == ""
