"""
Tests for course line parsing and key normalization.
"""

import pytest

from catalog import MapCatalog
from course_parser import CourseRecord, normalize, parse_line, parse_lines


# =============================================================================
# SECTION 1: Normalization
# =============================================================================

class TestNormalize:
    """Tests for the normalize function."""

    def test_uppercases(self):
        assert normalize("csci300") == "CSCI300"

    def test_strips_whitespace(self):
        """Leading/trailing whitespace goes, inner whitespace stays."""
        assert normalize("  csci 300\t") == "CSCI 300"

    def test_empty_and_none(self):
        assert normalize("") == ""
        assert normalize("   ") == ""
        assert normalize(None) == ""

    def test_non_ascii_letters_pass_through(self):
        """Only a-z are uppercased; 'ß' must not grow into 'SS'."""
        assert normalize("straße101") == "STRAßE101"
        assert normalize("ﬁn200") == "ﬁN200"
        assert normalize("é100") == "é100"

    def test_non_ascii_whitespace_not_trimmed(self):
        """Only ASCII whitespace is trimmed."""
        assert normalize("\u00a0cs101\t") == "\u00a0CS101"

    def test_ascii_and_unicode_variants_stay_distinct(self):
        catalog = MapCatalog()
        catalog.insert_or_replace(parse_line("STRASSE1,A"))
        catalog.insert_or_replace(parse_line("straße1,B"))
        assert len(catalog) == 2
        assert catalog.find("STRAßE1").title == "B"

    @pytest.mark.parametrize("raw", ["cs101", " CS101 ", "Math 201\n", "", "  ", "já 3", "straße"])
    def test_idempotent(self, raw):
        assert normalize(normalize(raw)) == normalize(raw)


# =============================================================================
# SECTION 2: Line Parsing
# =============================================================================

class TestParseLine:
    """Tests for parse_line."""

    def test_course_without_prerequisites(self):
        record = parse_line("CSCI100,Introduction to Computer Science")
        assert record == CourseRecord("CSCI100", "Introduction to Computer Science", [])

    def test_course_with_prerequisites_in_order(self):
        record = parse_line("CSCI301,Advanced Programming in C++,CSCI101,MATH201")
        assert record.identifier == "CSCI301"
        assert record.title == "Advanced Programming in C++"
        assert record.prerequisites == ["CSCI101", "MATH201"]

    def test_fields_are_normalized(self):
        """Ids are trimmed + uppercased; the title is trimmed but keeps its case."""
        record = parse_line("  cs101 ,  Intro to CS ,  cs100 ")
        assert record.identifier == "CS101"
        assert record.title == "Intro to CS"
        assert record.prerequisites == ["CS100"]

    def test_empty_prerequisite_fields_dropped(self):
        """Trailing or doubled commas don't produce empty prerequisites."""
        record = parse_line("CS200,Data Structures,,CS101,  ,")
        assert record.prerequisites == ["CS101"]

    def test_duplicate_prerequisites_kept(self):
        record = parse_line("CS200,Data Structures,CS101,cs101")
        assert record.prerequisites == ["CS101", "CS101"]

    def test_windows_line_ending(self):
        record = parse_line("CS200,Data Structures,CS101\r\n")
        assert record.prerequisites == ["CS101"]

    @pytest.mark.parametrize("line", [
        "",
        "   ",
        "\n",
        "CS101",            # no title
        "CS101,",           # empty title
        "CS101,   ,CS100",  # blank title
        ",Intro to CS",     # empty id
        "  ,Intro to CS",
    ])
    def test_malformed_lines_skipped(self, line):
        assert parse_line(line) is None


class TestParseLines:
    """Tests for parse_lines."""

    def test_skips_bad_lines_keeps_order(self):
        lines = ["CS101,Intro", "garbage", "", "CS100,Fundamentals"]
        records = list(parse_lines(lines))
        assert [r.identifier for r in records] == ["CS101", "CS100"]


class TestCourseRecord:
    """Hand-built records follow the same key rules as parsed ones."""

    def test_post_init_normalizes(self):
        record = CourseRecord(" cs101 ", " Intro ", [" cs100", ""])
        assert record.identifier == "CS101"
        assert record.title == "Intro"
        assert record.prerequisites == ["CS100"]
