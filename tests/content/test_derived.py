"""Tests for derived fields: plain text, reading time, excerpts."""

from folio.content.derived import (
    ELLIPSIS,
    EXCERPT_LENGTH,
    calculate_reading_time,
    generate_excerpt,
    strip_markup,
)


class TestStripMarkup:
    def test_removes_html_tags(self):
        assert strip_markup("<p>Hello <strong>there</strong></p>") == "Hello there"

    def test_removes_markdown_symbols(self):
        assert strip_markup("# Title\n\n**bold** `code` [link](url)") == "Title bold code linkurl"

    def test_collapses_whitespace(self):
        assert strip_markup("  a \n\n  b\t c  ") == "a b c"

    def test_decodes_entities(self):
        assert strip_markup("<p>a &amp; b</p>") == "a & b"


class TestReadingTime:
    def test_empty_is_one_minute(self):
        assert calculate_reading_time("") == 1

    def test_exactly_one_minute(self):
        assert calculate_reading_time("word " * 200) == 1

    def test_rounds_up(self):
        assert calculate_reading_time("word " * 201) == 2

    def test_longer_text(self):
        assert calculate_reading_time("word " * 450) == 3

    def test_markup_not_counted(self):
        # "#" and "**" alone are stripped, leaving 200 words
        text = "# " + "word " * 200 + " ** "
        assert calculate_reading_time(text) == 1

    def test_custom_rate(self):
        assert calculate_reading_time("word " * 100, words_per_minute=50) == 2


class TestGenerateExcerpt:
    def test_short_text_returned_as_is(self):
        assert generate_excerpt("Hello *world*") == "Hello world"

    def test_exactly_budget(self):
        text = "x" * EXCERPT_LENGTH
        assert generate_excerpt(text) == text

    def test_word_boundary_with_ellipsis(self):
        text = "word " * 60  # 300 characters, no sentence break
        excerpt = generate_excerpt(text)
        assert excerpt.endswith(ELLIPSIS)
        assert len(excerpt) <= EXCERPT_LENGTH + len(ELLIPSIS)
        body = excerpt[: -len(ELLIPSIS)]
        assert body.endswith("word")
        assert not body.endswith(" ")

    def test_sentence_end_past_eighty_percent(self):
        text = "a" * 140 + ". " + "b " * 100
        excerpt = generate_excerpt(text)
        assert excerpt == "a" * 140 + "."

    def test_early_period_falls_back_to_word_boundary(self):
        text = "Short sentence. " + "word " * 60
        excerpt = generate_excerpt(text)
        assert excerpt.endswith(ELLIPSIS)
        assert excerpt.startswith("Short sentence. word")

    def test_hard_cut_without_spaces(self):
        excerpt = generate_excerpt("x" * 200)
        assert excerpt == "x" * EXCERPT_LENGTH + ELLIPSIS

    def test_custom_length(self):
        assert generate_excerpt("one two three four", max_length=9) == "one two..."

    def test_html_body(self):
        assert generate_excerpt("<h1>Title</h1>\n<p>Body</p>") == "Title Body"
