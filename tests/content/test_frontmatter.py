"""Tests for the frontmatter parser."""

from datetime import datetime

from folio.content.frontmatter import (
    parse_frontmatter,
    parse_inline_list,
    parse_metadata_block,
    strip_quotes,
)

SAMPLE_POST = """\
---
title: "Angular Signals: A Deep Dive"
date: 2024-01-10
category: angular
tags: ['signals', "rxjs", testing]
excerpt: 'Reactive state without the ceremony.'
coverImage: /assets/images/signals.jpg
author: Jane Doe
seoTitle: Signals Guide
seoDescription: Everything about signals
keywords: [angular, signals]
featured: True
draft: false
readTime: 7
layout: wide
---
# Angular Signals

Body text.
"""


class TestNoFrontmatter:
    def test_body_is_whole_input(self):
        text = "# Just a title\n\nSome body text."
        parsed = parse_frontmatter(text)
        assert parsed.body == text
        assert parsed.has_frontmatter is False

    def test_default_metadata(self):
        parsed = parse_frontmatter("plain text")
        fm = parsed.frontmatter
        assert fm.title == "Untitled Post"
        assert fm.category == "general"
        assert fm.tags == []
        assert fm.excerpt == ""
        assert fm.featured is False
        assert fm.draft is False
        assert fm.read_time is None
        # Default date is a parseable timestamp
        assert datetime.fromisoformat(fm.date)

    def test_unclosed_block_is_body(self):
        text = "---\ntitle: Never closed\n\nBody"
        parsed = parse_frontmatter(text)
        assert parsed.body == text
        assert parsed.frontmatter.title == "Untitled Post"

    def test_delimiter_not_at_start(self):
        text = "Intro\n---\ntitle: x\n---\nBody"
        parsed = parse_frontmatter(text)
        assert parsed.body == text
        assert parsed.has_frontmatter is False

    def test_empty_string(self):
        parsed = parse_frontmatter("")
        assert parsed.body == ""
        assert parsed.frontmatter.title == "Untitled Post"


class TestWellFormedFrontmatter:
    def test_scalar_fields(self):
        fm = parse_frontmatter(SAMPLE_POST).frontmatter
        assert fm.title == "Angular Signals: A Deep Dive"
        assert fm.date == "2024-01-10"
        assert fm.category == "angular"
        assert fm.excerpt == "Reactive state without the ceremony."
        assert fm.cover_image == "/assets/images/signals.jpg"
        assert fm.author == "Jane Doe"
        assert fm.seo_title == "Signals Guide"
        assert fm.seo_description == "Everything about signals"

    def test_list_fields(self):
        fm = parse_frontmatter(SAMPLE_POST).frontmatter
        assert fm.tags == ["signals", "rxjs", "testing"]
        assert fm.keywords == ["angular", "signals"]

    def test_boolean_fields(self):
        fm = parse_frontmatter(SAMPLE_POST).frontmatter
        assert fm.featured is True
        assert fm.draft is False

    def test_read_time(self):
        fm = parse_frontmatter(SAMPLE_POST).frontmatter
        assert fm.read_time == 7

    def test_body_after_block(self):
        parsed = parse_frontmatter(SAMPLE_POST)
        assert parsed.has_frontmatter is True
        assert parsed.body == "# Angular Signals\n\nBody text.\n"

    def test_empty_block(self):
        parsed = parse_frontmatter("---\n---\nBody text")
        assert parsed.has_frontmatter is True
        assert parsed.body == "Body text"
        assert parsed.frontmatter.title == "Untitled Post"

    def test_crlf_line_endings(self):
        parsed = parse_frontmatter("---\r\ntitle: Windows\r\n---\r\nBody")
        assert parsed.frontmatter.title == "Windows"
        assert parsed.body == "Body"

    def test_leading_byte_order_mark(self):
        parsed = parse_frontmatter("\ufeff---\ntitle: Hello\n---\nBody")
        assert parsed.has_frontmatter is True
        assert parsed.frontmatter.title == "Hello"
        assert parsed.body == "Body"

    def test_closing_delimiter_at_end_of_input(self):
        parsed = parse_frontmatter("---\ntitle: Only meta\n---")
        assert parsed.frontmatter.title == "Only meta"
        assert parsed.body == ""


class TestLenientParsing:
    def test_unknown_keys_ignored(self):
        fields = parse_metadata_block("layout: wide\ntitle: Kept")
        assert fields == {"title": "Kept"}

    def test_lines_without_colon_ignored(self):
        fields = parse_metadata_block("just some words\ntitle: Kept")
        assert fields == {"title": "Kept"}

    def test_value_split_at_first_colon(self):
        fields = parse_metadata_block("title: Part 1: The Beginning")
        assert fields["title"] == "Part 1: The Beginning"

    def test_unparseable_read_time_is_unset(self):
        fields = parse_metadata_block("readTime: soon")
        assert "read_time" not in fields

    def test_zero_read_time_is_unset(self):
        fields = parse_metadata_block("readTime: 0")
        assert "read_time" not in fields

    def test_tags_without_brackets_ignored(self):
        fm = parse_frontmatter("---\ntags: a, b\n---\nBody").frontmatter
        assert fm.tags == []

    def test_boolean_case_insensitive(self):
        fields = parse_metadata_block("featured: TRUE\ndraft: yes")
        assert fields["featured"] is True
        assert fields["draft"] is False


class TestQuoteHelpers:
    def test_strips_double_quotes(self):
        assert strip_quotes('"hello"') == "hello"

    def test_strips_single_quotes(self):
        assert strip_quotes("'hello'") == "hello"

    def test_strips_only_one_layer(self):
        assert strip_quotes("\"'nested'\"") == "'nested'"

    def test_mismatched_quotes_kept(self):
        assert strip_quotes("\"hello'") == "\"hello'"

    def test_single_quote_char_kept(self):
        assert strip_quotes('"') == '"'

    def test_inline_list(self):
        assert parse_inline_list("[ a , 'b', \"c\" ]") == ["a", "b", "c"]

    def test_inline_list_drops_empty(self):
        assert parse_inline_list("[a, , b,]") == ["a", "b"]

    def test_empty_inline_list(self):
        assert parse_inline_list("[]") == []

    def test_not_a_list(self):
        assert parse_inline_list("a, b") is None
