"""Tests for extractor.extract_title_and_description."""

from app.services.extractor import (
    extract_description,
    extract_title,
    extract_title_and_description,
)


class TestExtractTitle:
    def test_simple_heading(self):
        assert extract_title("# Hello World") == "Hello World"

    def test_first_heading_wins(self):
        assert extract_title("# First Title\n\n# Second Title\n\nDescription here.") == "First Title"

    def test_ignores_lower_level_headings(self):
        assert extract_title("## Day 1\n\n### Morning") == ""

    def test_h1_after_h2(self):
        assert extract_title("## Overview\n\n# Lisbon Weekend") == "Lisbon Weekend"

    def test_setext_heading(self):
        assert extract_title("Road Trip\n=========\n\nDay one.") == "Road Trip"

    def test_flattens_inline_formatting(self):
        assert extract_title("# Trip to *Lisbon* and **Porto**") == "Trip to Lisbon and Porto"

    def test_includes_inline_code_and_link_text(self):
        assert extract_title("# Pack `adapter` for [Japan](https://example.com)") == "Pack adapter for Japan"

    def test_trims_whitespace(self):
        assert extract_title("#    Spaced out   ") == "Spaced out"

    def test_heading_inside_blockquote_counts(self):
        assert extract_title("> # Quoted Title") == "Quoted Title"


class TestExtractDescription:
    def test_only_paragraph(self):
        assert extract_description("This is only a description.") == "This is only a description."

    def test_paragraph_after_title(self):
        title, description = extract_title_and_description("# My Title\n\nThis is a description.")
        assert title == "My Title"
        assert description == "This is a description."

    def test_paragraph_before_title_still_wins(self):
        title, description = extract_title_and_description("Intro first.\n\n# Title\n\nLater text.")
        assert title == "Title"
        assert description == "Intro first."

    def test_first_paragraph_only(self):
        assert extract_description("One.\n\nTwo.\n\nThree.") == "One."

    def test_soft_line_breaks_become_spaces(self):
        assert extract_description("Fly to Rome\nthen take the train.") == "Fly to Rome then take the train."

    def test_tight_list_is_not_a_paragraph(self):
        assert extract_description("- Item 1\n- Item 2") == ""

    def test_loose_list_paragraph_counts(self):
        assert extract_description("- Item 1\n\n- Item 2") == "Item 1"

    def test_paragraph_in_blockquote(self):
        assert extract_description("# Title\n\n> Bring an umbrella.") == "Bring an umbrella."

    def test_image_alt_text_is_flattened(self):
        assert extract_description("![Sunset over Oia](oia.jpg)") == "Sunset over Oia"

    def test_code_block_is_not_a_paragraph(self):
        assert extract_description("```\nnot a paragraph\n```") == ""


class TestExtractEdgeCases:
    def test_empty_input(self):
        assert extract_title_and_description("") == ("", "")

    def test_heading_only(self):
        assert extract_title_and_description("# Only Title") == ("Only Title", "")

    def test_whitespace_only(self):
        assert extract_title_and_description("   \n\n  ") == ("", "")

    def test_uses_markdown_structure_not_sanitized_html(self):
        # The raw HTML block is dropped from the rendered page but the
        # paragraph that follows is still the first paragraph.
        markdown = "<script>alert(1)</script>\n\nReal description."
        assert extract_description(markdown) == "Real description."
