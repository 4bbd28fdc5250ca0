"""Tests for heading-based section splitting."""
from intake.parser.section_detector import split_sections, build_sections, section_tags


def test_two_headings_make_two_sections():
    text = "# Overview\nFirst paragraph.\n\nSecond paragraph.\n# Details\nThird paragraph.\n"

    sections = split_sections(text)

    assert [title for title, _ in sections] == ["Overview", "Details"]
    assert sections[0][1] == "First paragraph.\n\nSecond paragraph.\n"
    assert sections[1][1] == "Third paragraph.\n"


def test_order_indices_are_contiguous(structured_text):
    sections = build_sections(structured_text)

    assert [s.order_index for s in sections] == [0, 1]
    assert [s.title for s in sections] == ["Overview", "Details"]


def test_no_headings_gives_single_placeholder_section():
    text = "Just a plain note.\nWith two lines."

    assert split_sections(text) == [("Document", "Just a plain note.\nWith two lines.\n")]


def test_empty_text_gives_placeholder_with_whole_input():
    assert split_sections("") == [("Document", "")]


def test_whitespace_only_text_keeps_input_as_content():
    assert split_sections("  \n\n") == [("Document", "  \n\n")]


def test_leading_heading_emits_no_empty_section():
    sections = split_sections("## Intro\nHello there\n")
    assert sections == [("Intro", "Hello there\n")]


def test_preamble_before_first_heading_uses_placeholder_title():
    sections = split_sections("Preamble text\n# Body\nBody text\n")
    assert sections == [("Document", "Preamble text\n"), ("Body", "Body text\n")]


def test_heading_depth_is_flat():
    text = "# A\nalpha\n### B\nbeta\n###### C\ngamma\n"
    assert [title for title, _ in split_sections(text)] == ["A", "B", "C"]


def test_seven_markers_is_not_a_heading():
    sections = split_sections("####### Not a heading\nbody\n")
    assert sections == [("Document", "####### Not a heading\nbody\n")]


def test_marker_without_space_is_not_a_heading():
    sections = split_sections("#hashtag\n")
    assert sections == [("Document", "#hashtag\n")]


def test_empty_sections_between_headings_are_dropped():
    sections = split_sections("# A\n\n# B\ncontent\n")
    assert sections == [("B", "content\n")]


def test_only_headings_falls_back_to_whole_text():
    text = "# A\n# B"
    assert split_sections(text) == [("Document", text)]


def test_content_concatenation_reproduces_body_lines():
    text = "intro line\n# One\nline a\nline b\n## Two\nline c\n"

    body = "".join(content for _, content in split_sections(text))
    expected = "".join(line + "\n" for line in text.splitlines() if not line.startswith("#"))

    assert body == expected


def test_section_tags_combine_insights_and_context_tags():
    tags = section_tags("Our sales process for every customer")

    assert tags[:2] == ["customer-analysis", "business-process"]
    assert "sales" in tags
    assert "process" in tags
    assert len(tags) == len(set(tags))


def test_section_tags_are_computed_per_section():
    text = "# Money\nThe budget is tight.\n# People\nLeadership offsite.\n"

    money, people = build_sections(text)

    assert "resource-planning" in money.tags
    assert "leadership" not in money.tags
    assert "leadership" in people.tags


def test_only_newline_separates_lines():
    text = "# A\npart one\u2028part two\nform\x0cfeed\n"

    sections = split_sections(text)

    assert sections == [("A", "part one\u2028part two\nform\x0cfeed\n")]


def test_carriage_returns_stay_in_content():
    sections = split_sections("# Notes\r\nfirst\r\nsecond\r\n")

    assert sections == [("Notes", "first\r\nsecond\r\n")]


def test_blank_heading_title_uses_placeholder():
    assert split_sections("#   \nbody text\n") == [("Document", "body text\n")]
