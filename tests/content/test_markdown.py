"""Tests for the markdown → HTML transformer."""

import pytest

from folio.content.markdown import MarkdownRenderer, render_markdown


class TestHeadings:
    def test_level_two(self):
        assert render_markdown("## Heading") == "<h2>Heading</h2>"

    def test_level_six(self):
        assert render_markdown("###### Six") == "<h6>Six</h6>"

    def test_all_levels(self):
        for level in range(1, 7):
            html = render_markdown("#" * level + " Title")
            assert html == f"<h{level}>Title</h{level}>"

    def test_seven_hashes_not_a_heading(self):
        assert render_markdown("####### Seven") == "<p>####### Seven</p>"

    def test_hash_without_space_not_a_heading(self):
        assert render_markdown("#hashtag") == "<p>#hashtag</p>"

    def test_inline_markup_in_heading(self):
        assert render_markdown("# **Bold** title") == "<h1><strong>Bold</strong> title</h1>"

    def test_heading_not_wrapped_in_paragraph(self):
        html = render_markdown("# Title\n\nText")
        assert html == "<h1>Title</h1>\n<p>Text</p>"
        assert "<p><h1>" not in html


class TestEmphasis:
    def test_bold_italic(self):
        assert render_markdown("***bold italic***") == (
            "<p><strong><em>bold italic</em></strong></p>"
        )

    def test_bold(self):
        assert render_markdown("**bold**") == "<p><strong>bold</strong></p>"

    def test_italic(self):
        assert render_markdown("*italic*") == "<p><em>italic</em></p>"

    def test_italic_inside_bold(self):
        assert render_markdown("**a *b* c**") == "<p><strong>a <em>b</em> c</strong></p>"

    def test_strikethrough(self):
        assert render_markdown("~~gone~~") == "<p><del>gone</del></p>"

    def test_unmatched_markers_are_literal(self):
        assert render_markdown("a * b and **c") == "<p>a * b and **c</p>"

    def test_unmatched_tilde_literal(self):
        assert render_markdown("~~open") == "<p>~~open</p>"


class TestCode:
    def test_fenced_block_with_language(self):
        html = render_markdown("```python\nx = 1 < 2\n**not bold**\n```")
        assert html == (
            '<pre><code class="language-python">x = 1 &lt; 2\n**not bold**</code></pre>'
        )

    def test_fenced_block_without_language(self):
        assert render_markdown("```\nplain\n```") == "<pre><code>plain</code></pre>"

    def test_fence_content_not_processed(self):
        html = render_markdown("```\n# not a heading\n- not a list\n```")
        assert "<h1>" not in html
        assert "<li>" not in html
        assert "# not a heading" in html

    def test_unterminated_fence_runs_to_end(self):
        assert render_markdown("```\ncode") == "<pre><code>code</code></pre>"

    def test_inline_code(self):
        assert render_markdown("Use `*args` here") == "<p>Use <code>*args</code> here</p>"

    def test_inline_code_escaped(self):
        assert render_markdown("`<div>`") == "<p><code>&lt;div&gt;</code></p>"

    def test_text_around_fence(self):
        html = render_markdown("Before\n```\ncode\n```\nAfter")
        assert html == "<p>Before</p>\n<pre><code>code</code></pre>\n<p>After</p>"


class TestLinksAndImages:
    def test_external_link(self):
        html = render_markdown("[Docs](https://angular.dev/guide)", site_host="example.com")
        assert html == (
            '<p><a href="https://angular.dev/guide" target="_blank" '
            'rel="noopener noreferrer">Docs</a></p>'
        )

    def test_relative_link_is_internal(self):
        assert render_markdown("[About](/about)") == '<p><a href="/about">About</a></p>'

    def test_same_host_link_is_internal(self):
        html = render_markdown("[Home](https://example.com/home)", site_host="example.com")
        assert html == '<p><a href="https://example.com/home">Home</a></p>'

    def test_host_comparison_case_insensitive(self):
        renderer = MarkdownRenderer(site_host="Example.com")
        assert renderer.is_external("https://EXAMPLE.com/x") is False

    def test_emphasis_not_applied_to_url(self):
        html = render_markdown("[x](https://a.com/some_*path*)")
        assert "<em>" not in html
        assert 'href="https://a.com/some_*path*"' in html

    def test_emphasis_in_link_text(self):
        assert render_markdown("[**Bold** link](/x)") == (
            '<p><a href="/x"><strong>Bold</strong> link</a></p>'
        )

    def test_image(self):
        assert render_markdown("![Logo](/img/logo.png)") == (
            '<p><img src="/img/logo.png" alt="Logo" loading="lazy"></p>'
        )

    def test_image_not_treated_as_link(self):
        html = render_markdown("![Alt](https://cdn.example.org/a.png)")
        assert "<a " not in html
        assert "!<" not in html

    def test_empty_link_text_is_literal(self):
        assert render_markdown("[](/x)") == "<p>[](/x)</p>"


class TestBlocks:
    def test_blockquote(self):
        assert render_markdown("> quoted text") == "<blockquote><p>quoted text</p></blockquote>"

    def test_multiline_blockquote(self):
        assert render_markdown("> one\n> two") == "<blockquote><p>one<br>two</p></blockquote>"

    def test_horizontal_rule(self):
        assert render_markdown("above\n\n---\n\nbelow") == "<p>above</p>\n<hr>\n<p>below</p>"

    def test_four_hyphens_not_a_rule(self):
        assert "<hr>" not in render_markdown("----")


class TestLists:
    def test_bullets_merge_into_one_list(self):
        assert render_markdown("- one\n- two\n* three\n+ four") == (
            "<ul><li>one</li><li>two</li><li>three</li><li>four</li></ul>"
        )

    def test_ordered_list(self):
        assert render_markdown("1. a\n2. b") == "<ol><li>a</li><li>b</li></ol>"

    def test_kind_change_starts_new_list(self):
        assert render_markdown("- a\n1. b") == "<ul><li>a</li></ul>\n<ol><li>b</li></ol>"

    def test_blank_line_between_items_keeps_list(self):
        assert render_markdown("- a\n\n- b") == "<ul><li>a</li><li>b</li></ul>"

    def test_separate_lists_around_paragraph(self):
        html = render_markdown("- a\n\ntext\n\n- b")
        assert html == "<ul><li>a</li></ul>\n<p>text</p>\n<ul><li>b</li></ul>"

    def test_inline_markup_in_items(self):
        assert render_markdown("- **Simple**: easy") == (
            "<ul><li><strong>Simple</strong>: easy</li></ul>"
        )


class TestParagraphs:
    def test_single_newline_becomes_break(self):
        assert render_markdown("line one\nline two") == "<p>line one<br>line two</p>"

    def test_blank_line_separates_paragraphs(self):
        assert render_markdown("first\n\nsecond") == "<p>first</p>\n<p>second</p>"

    def test_html_escaped(self):
        assert render_markdown("a < b & c") == "<p>a &lt; b &amp; c</p>"

    def test_empty_input(self):
        assert render_markdown("") == ""

    def test_whitespace_only_input(self):
        assert render_markdown("   \n\n  \n") == ""

    def test_no_empty_paragraphs(self):
        assert "<p></p>" not in render_markdown("\n\n\n# Title\n\n\n\ntext\n\n\n")


class TestTotality:
    @pytest.mark.parametrize(
        "text",
        ["[", "](", "```", "> ", ">", "*", "#", "---", "![](", "**", "`", "1.", "- ", "\r\n\r"],
    )
    def test_never_fails(self, text: str):
        assert isinstance(render_markdown(text), str)

    def test_deterministic(self):
        text = "# T\n\n- a\n- b\n\n> q\n\n```js\nx\n```\n\n**b** *i* ~~s~~ [l](/x)"
        assert render_markdown(text) == render_markdown(text)
