"""
Unit Tests for Markdown Preview Rendering.

Black box tests against render_html, note_preview and the parser tree.
"""

import pytest

from cloudnotes.backend.core.markdown import (
    BlockQuote,
    CodeBlock,
    Heading,
    ListBlock,
    MarkdownPreviewRenderer,
    Paragraph,
    RawHtml,
    Strong,
    Text,
    is_safe_url,
    note_preview,
    parse,
    render_html,
    render_plain_text,
)

P = '<p class="mb-4">'
CODE = '<code class="font-mono bg-muted px-1 py-0.5 rounded">'
PRE = '<pre class="font-mono bg-muted p-3 rounded mb-4 overflow-x-auto">'
A_CLASS = 'class="text-primary underline"'
QUOTE = '<blockquote class="pl-4 border-l-4 border-muted italic my-4">'


# =============================================================================
# Parser
# =============================================================================


class TestParse:
    """Tests for the block structure produced by parse()."""

    def test_empty_input(self):
        assert parse("").blocks == []
        assert parse(None).blocks == []

    def test_block_kinds(self):
        source = "# Title\n\nText\n* item\n> quote\n```\ncode\n```"

        kinds = [type(block) for block in parse(source).blocks]

        assert kinds == [Heading, Paragraph, ListBlock, BlockQuote, CodeBlock]

    def test_heading_levels(self):
        blocks = parse("# one\n## two\n### three").blocks
        assert [block.level for block in blocks] == [1, 2, 3]

    def test_deep_headings_keep_their_source(self):
        block = parse("###### six").blocks[0]

        assert isinstance(block, Heading)
        assert block.level == 6
        assert block.source == "###### six"

    def test_fence_language_is_recorded(self):
        block = parse("```python\nprint(1)\n```").blocks[0]
        assert block == CodeBlock("print(1)", language="python")

    def test_unclosed_fence_runs_to_end(self):
        block = parse("```\nline one\nline two").blocks[0]
        assert block.text == "line one\nline two"

    def test_closing_fence_after_text(self):
        block = parse("```\nabc\nxyz```").blocks[0]
        assert block.text == "abc\nxyz"

    def test_single_line_fence(self):
        assert parse("```inline```").blocks == [CodeBlock("inline")]

    def test_windows_line_endings(self):
        blocks = parse("# Title\r\nBody\r\n").blocks
        assert [type(block) for block in blocks] == [Heading, Paragraph]

    def test_nested_inlines(self):
        paragraph = parse("**bold *and* more**").blocks[0]
        strong = paragraph.children[0]
        assert isinstance(strong, Strong)
        assert strong.children[0] == Text("bold ")

    def test_raw_html_only_when_requested(self):
        assert isinstance(parse("<div>x</div>").blocks[0], Paragraph)
        assert isinstance(parse("<p>x</p>", raw_html=True).blocks[0], RawHtml)

    def test_raw_pre_block_spans_lines(self):
        blocks = parse("<pre>\nkeep\n  this\n</pre>\nafter", raw_html=True).blocks
        assert blocks[0] == RawHtml("<pre>\nkeep\n  this\n</pre>")
        assert isinstance(blocks[1], Paragraph)


# =============================================================================
# HTML output
# =============================================================================


class TestRenderHtml:
    """Tests for render_html()."""

    def test_headings(self):
        html = render_html("# One\n## Two\n### Three")
        assert html.split("\n") == [
            '<h1 class="text-2xl font-bold mt-6 mb-4">One</h1>',
            '<h2 class="text-xl font-bold mt-5 mb-3">Two</h2>',
            '<h3 class="text-lg font-bold mt-4 mb-2">Three</h3>',
        ]

    def test_four_hashes_is_not_a_heading(self):
        assert render_html("#### Four") == f"{P}#### Four</p>"

    def test_heading_then_paragraph(self):
        assert render_html("# Title\n\nSome text") == (
            '<h1 class="text-2xl font-bold mt-6 mb-4">Title</h1>\n'
            f"{P}Some text</p>"
        )

    def test_bold_and_italic_share_one_paragraph(self):
        assert render_html("**bold** and *italic*") == (
            f"{P}<strong>bold</strong> and <em>italic</em></p>"
        )

    def test_each_line_is_a_paragraph(self):
        assert render_html("first\nsecond") == f"{P}first</p>\n{P}second</p>"

    def test_inline_formatting(self):
        html = render_html("**bold** *it* `x` [docs](https://example.com)")
        assert html == (
            f"{P}<strong>bold</strong> <em>it</em> {CODE}x</code> "
            f'<a href="https://example.com" {A_CLASS}>docs</a></p>'
        )

    def test_code_span_content_is_not_formatted(self):
        assert render_html("`**raw**`") == f"{P}{CODE}**raw**</code></p>"

    def test_underscores_are_kept(self):
        assert render_html("snake_case_name") == f"{P}snake_case_name</p>"

    def test_bullet_lists_coalesce_across_blank_lines(self):
        html = render_html("* a\n- b\n\n* c")
        assert html == "<ul>\n<li>a</li>\n<li>b</li>\n<li>c</li>\n</ul>"

    def test_numbered_list(self):
        assert render_html("1. one\n2. two") == "<ol>\n<li>one</li>\n<li>two</li>\n</ol>"

    def test_list_kind_change_starts_new_list(self):
        assert render_html("* a\n1. b") == "<ul>\n<li>a</li>\n</ul>\n<ol>\n<li>b</li>\n</ol>"

    def test_blockquote_lines_are_joined(self):
        assert render_html("> one\n> two") == f"{QUOTE}one<br>two</blockquote>"

    def test_code_block_is_escaped(self):
        assert render_html("```\nif a < b:\n```") == f"{PRE}if a &lt; b:</pre>"

    def test_source_html_is_escaped(self):
        assert render_html("<b>hi</b> & more") == f"{P}&lt;b&gt;hi&lt;/b&gt; &amp; more</p>"

    def test_unsafe_link_is_neutralised(self):
        assert render_html("[x](javascript:alert)") == f'{P}<a href="#" {A_CLASS}>x</a></p>'

    def test_link_label_keeps_formatting(self):
        html = render_html("[**big**](/notes/1)")
        assert html == f'{P}<a href="/notes/1" {A_CLASS}><strong>big</strong></a></p>'

    def test_unescaped_mode_passes_html_through(self):
        assert render_html("<p>raw</p>", escape=False) == "<p>raw</p>"
        assert render_html("<b>x</b>", escape=False) == f"{P}<b>x</b></p>"

    def test_unescaped_mode_is_idempotent(self):
        source = (
            "# Title\n\nIntro with **bold**\n* one\n* two\n1. first\n"
            "> quoted\n```\nx = 1\n```\nclosing"
        )
        once = render_html(source, escape=False)
        twice = render_html(once, escape=False)

        assert twice == once
        assert f"{P}<h1" not in twice

    def test_custom_classes(self):
        renderer = MarkdownPreviewRenderer(classes={})
        assert renderer.to_html("# T\ntext") == "<h1>T</h1>\n<p>text</p>"

    def test_empty(self):
        assert render_html("") == ""
        assert render_html(None) == ""


class TestIsSafeUrl:
    """Tests for link target filtering."""

    @pytest.mark.parametrize(
        "url",
        ["https://example.com", "http://x", "mailto:a@b.c", "/relative", "#anchor", "notes/1"],
    )
    def test_allowed(self, url):
        assert is_safe_url(url)

    @pytest.mark.parametrize(
        "url",
        ["javascript:alert(1)", "JAVASCRIPT:x", "java\tscript:x", "data:text/html,hi", "vbscript:x"],
    )
    def test_blocked(self, url):
        assert not is_safe_url(url)


# =============================================================================
# Plain text output
# =============================================================================


class TestPlainText:
    """Tests for render_plain_text() and note_preview()."""

    def test_drops_headings_and_code(self):
        source = "# Title\nBody *text*\n```\nsecret()\n```"
        assert render_plain_text(source) == "Body text"

    @pytest.mark.parametrize("hashes", ["####", "#####", "######"])
    def test_drops_deep_headings(self, hashes):
        assert render_plain_text(f"{hashes} Deep heading\nBody") == "Body"

    def test_drops_title_and_single_line_code(self):
        source = "# Title\n\n```code```\nBody **text**"

        text = render_plain_text(source)

        assert text == "Body text"
        assert len(text) <= 100

    def test_keeps_list_and_quote_text(self):
        assert render_plain_text("* milk\n* eggs\n> quoted") == "milk\neggs\nquoted"

    def test_link_keeps_label(self):
        assert render_plain_text("see [the docs](https://x)") == "see the docs"

    def test_limit(self):
        assert render_plain_text("abcdefghij", limit=4) == "abcd"

    def test_preview_short_text_unchanged(self):
        text = "x" * 100
        assert note_preview(text) == text

    def test_preview_truncated_gets_ellipsis(self):
        assert note_preview("x" * 150) == "x" * 100 + "..."

    def test_preview_trims_before_ellipsis(self):
        source = "a" * 99 + " bbbb"
        assert note_preview(source) == "a" * 99 + "..."

    def test_preview_of_empty_note(self):
        assert note_preview(None) == ""

    def test_configured_renderer(self):
        renderer = MarkdownPreviewRenderer(preview_length=5, ellipsis="~")
        assert renderer.preview("hello world") == "hello~"
        assert renderer.to_plain_text("hello world") == "hello"
        assert renderer.to_plain_text("hello world", limit=8) == "hello wo"
