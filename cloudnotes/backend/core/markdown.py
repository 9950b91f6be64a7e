"""
Markdown Preview Rendering.

Renders the Markdown dialect used in note bodies, either as HTML for the
note preview pane or as a short plain-text snippet for note lists.

Supported constructs:
    Blocks   - "# ", "## ", "### " headings, ``` fenced code, "> " quotes,
               "* " / "- " bullet items, "1. " numbered items, paragraphs
    Inlines  - `code`, [text](url), **bold**, *italic*

Source text is first parsed into a small block/inline tree, then handed
to a renderer, so one construct never re-matches another's output.

Usage:
    from cloudnotes.backend.core.markdown import render_html, note_preview

    html = render_html(note.content)
    snippet = note_preview(note.content)
"""

import html
import re
from dataclasses import dataclass, field

PREVIEW_LENGTH = 100
PREVIEW_ELLIPSIS = "..."

DEFAULT_CLASSES: dict[str, str] = {
    "h1": "text-2xl font-bold mt-6 mb-4",
    "h2": "text-xl font-bold mt-5 mb-3",
    "h3": "text-lg font-bold mt-4 mb-2",
    "p": "mb-4",
    "a": "text-primary underline",
    "pre": "font-mono bg-muted p-3 rounded mb-4 overflow-x-auto",
    "code": "font-mono bg-muted px-1 py-0.5 rounded",
    "blockquote": "pl-4 border-l-4 border-muted italic my-4",
}

SAFE_URL_SCHEMES = frozenset({"http", "https", "mailto"})

FENCE = "```"
HEADING_PATTERN = re.compile(r"^(#{1,3}) (.*)$")
# Deeper or tab-separated headings are only hidden from plain text
TEXT_HEADING_PATTERN = re.compile(r"^(#{1,6})\s(.*)$")
QUOTE_PATTERN = re.compile(r"^> ?(.*)$")
BULLET_PATTERN = re.compile(r"^\s*[*-] (.*)$")
NUMBERED_PATTERN = re.compile(r"^\s*\d+\. (.*)$")
BLOCK_TAG_PATTERN = re.compile(
    r"^\s*</?(h[1-6]|p|ul|ol|li|blockquote|pre|code)\b", re.IGNORECASE
)
PRE_OPEN_PATTERN = re.compile(r"^\s*<pre\b", re.IGNORECASE)
URL_SCHEME_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x20\x7f]")

# Alternation order breaks ties between matches starting at the same offset
INLINE_PATTERN = re.compile(
    r"`(?P<code>[^`]+)`"
    r"|\[(?P<label>[^\]]+)\]\((?P<url>[^)\s]+)\)"
    r"|\*\*(?P<strong>.+?)\*\*"
    r"|\*(?P<em>.+?)\*"
)


# =============================================================================
# Tree
# =============================================================================


@dataclass
class Text:
    text: str


@dataclass
class Code:
    text: str


@dataclass
class Link:
    children: list["Inline"]
    url: str


@dataclass
class Strong:
    children: list["Inline"]


@dataclass
class Emphasis:
    children: list["Inline"]


Inline = Text | Code | Link | Strong | Emphasis


@dataclass
class Heading:
    level: int
    children: list[Inline]
    # Set when the line is kept as a paragraph in HTML
    source: str | None = None


@dataclass
class Paragraph:
    children: list[Inline]


@dataclass
class ListBlock:
    ordered: bool
    items: list[list[Inline]] = field(default_factory=list)


@dataclass
class CodeBlock:
    text: str
    language: str | None = None


@dataclass
class BlockQuote:
    lines: list[list[Inline]] = field(default_factory=list)


@dataclass
class RawHtml:
    """A line (or <pre> run) that is already rendered HTML."""

    text: str


Block = Heading | Paragraph | ListBlock | CodeBlock | BlockQuote | RawHtml


@dataclass
class Document:
    blocks: list[Block] = field(default_factory=list)


# =============================================================================
# Parser
# =============================================================================


def parse_inline(text: str) -> list[Inline]:
    """Split a line of text into inline nodes."""
    nodes: list[Inline] = []
    position = 0

    for match in INLINE_PATTERN.finditer(text):
        if match.start() > position:
            nodes.append(Text(text[position:match.start()]))

        if match.group("code") is not None:
            nodes.append(Code(match.group("code")))
        elif match.group("label") is not None:
            nodes.append(Link(parse_inline(match.group("label")), match.group("url")))
        elif match.group("strong") is not None:
            nodes.append(Strong(parse_inline(match.group("strong"))))
        else:
            nodes.append(Emphasis(parse_inline(match.group("em"))))

        position = match.end()

    if position < len(text):
        nodes.append(Text(text[position:]))

    return nodes


def _list_kind(line: str) -> tuple[bool, str] | None:
    """Return (ordered, item text) for a list item line."""
    match = BULLET_PATTERN.match(line)
    if match:
        return False, match.group(1)
    match = NUMBERED_PATTERN.match(line)
    if match:
        return True, match.group(1)
    return None


def _next_content_line(lines: list[str], start: int) -> int:
    """Index of the next non-blank line at or after start (len(lines) if none)."""
    index = start
    while index < len(lines) and not lines[index].strip():
        index += 1
    return index


def parse(markdown: str | None, raw_html: bool = False) -> Document:
    """
    Parse Markdown source into a Document.

    Args:
        markdown: Source text; None is treated as empty
        raw_html: Keep lines that already start with a block-level HTML
            tag as RawHtml instead of treating them as text

    Returns:
        Document tree
    """
    document = Document()
    if not markdown:
        return document

    lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    index = 0

    while index < len(lines):
        line = lines[index]
        stripped = line.strip()

        if not stripped:
            index += 1
            continue

        if raw_html and BLOCK_TAG_PATTERN.match(line):
            chunk = [line]
            index += 1
            if PRE_OPEN_PATTERN.match(line) and "</pre>" not in line.lower():
                while index < len(lines):
                    chunk.append(lines[index])
                    index += 1
                    if "</pre>" in chunk[-1].lower():
                        break
            document.blocks.append(RawHtml("\n".join(chunk)))
            continue

        if stripped.startswith(FENCE):
            remainder = stripped[len(FENCE):]
            if remainder.endswith(FENCE) and len(remainder) >= len(FENCE):
                document.blocks.append(CodeBlock(remainder[:-len(FENCE)]))
                index += 1
                continue

            body: list[str] = []
            index += 1
            while index < len(lines):
                current = lines[index]
                index += 1
                if FENCE in current:
                    before = current.split(FENCE, 1)[0]
                    if before.strip():
                        body.append(before)
                    break
                body.append(current)
            document.blocks.append(
                CodeBlock("\n".join(body), language=remainder.strip() or None)
            )
            continue

        heading = HEADING_PATTERN.match(line)
        if heading:
            level = len(heading.group(1))
            document.blocks.append(Heading(level, parse_inline(heading.group(2).strip())))
            index += 1
            continue

        heading = TEXT_HEADING_PATTERN.match(line)
        if heading:
            level = len(heading.group(1))
            document.blocks.append(
                Heading(level, parse_inline(heading.group(2).strip()), source=stripped)
            )
            index += 1
            continue

        if QUOTE_PATTERN.match(line):
            quote = BlockQuote()
            while index < len(lines):
                match = QUOTE_PATTERN.match(lines[index])
                if not match:
                    break
                quote.lines.append(parse_inline(match.group(1).strip()))
                index += 1
            document.blocks.append(quote)
            continue

        item = _list_kind(line)
        if item is not None:
            ordered = item[0]
            block = ListBlock(ordered=ordered)
            while True:
                block.items.append(parse_inline(item[1].strip()))
                index += 1
                # Items of the same kind separated only by blank lines share a list
                following = _next_content_line(lines, index)
                if following >= len(lines):
                    index = following
                    break
                item = _list_kind(lines[following])
                if item is None or item[0] != ordered:
                    break
                index = following
            document.blocks.append(block)
            continue

        document.blocks.append(Paragraph(parse_inline(stripped)))
        index += 1

    return document


# =============================================================================
# Renderers
# =============================================================================


def is_safe_url(url: str) -> bool:
    """Allow relative URLs and the http, https and mailto schemes."""
    normalized = CONTROL_CHARS_PATTERN.sub("", url)
    match = URL_SCHEME_PATTERN.match(normalized)
    return match is None or match.group(1).lower() in SAFE_URL_SCHEMES


class HtmlRenderer:
    """
    Renders a Document as HTML, one block per line.

    With escape=True every piece of source text is HTML-escaped and
    unsafe link targets are replaced by "#". With escape=False text is
    emitted verbatim and the output must only be used for trusted notes.
    """

    def __init__(self, escape: bool = True, classes: dict[str, str] | None = None) -> None:
        self.escape = escape
        self.classes = DEFAULT_CLASSES if classes is None else classes

    def _open(self, tag: str) -> str:
        css = self.classes.get(tag)
        return f'<{tag} class="{css}">' if css else f"<{tag}>"

    def _text(self, text: str) -> str:
        return html.escape(text, quote=False) if self.escape else text

    def _href(self, url: str) -> str:
        if not self.escape:
            return url
        return html.escape(url if is_safe_url(url) else "#", quote=True)

    def render_inline(self, nodes: list[Inline]) -> str:
        parts = []
        for node in nodes:
            if isinstance(node, Text):
                parts.append(self._text(node.text))
            elif isinstance(node, Code):
                parts.append(f"{self._open('code')}{self._text(node.text)}</code>")
            elif isinstance(node, Link):
                css = self.classes.get("a")
                css_attr = f' class="{css}"' if css else ""
                parts.append(
                    f'<a href="{self._href(node.url)}"{css_attr}>'
                    f"{self.render_inline(node.children)}</a>"
                )
            elif isinstance(node, Strong):
                parts.append(f"<strong>{self.render_inline(node.children)}</strong>")
            elif isinstance(node, Emphasis):
                parts.append(f"<em>{self.render_inline(node.children)}</em>")
        return "".join(parts)

    def render_block(self, block: Block) -> str:
        if isinstance(block, Heading) and block.source is not None:
            return f"{self._open('p')}{self.render_inline(parse_inline(block.source))}</p>"
        if isinstance(block, Heading):
            tag = f"h{block.level}"
            return f"{self._open(tag)}{self.render_inline(block.children)}</{tag}>"
        if isinstance(block, Paragraph):
            return f"{self._open('p')}{self.render_inline(block.children)}</p>"
        if isinstance(block, ListBlock):
            tag = "ol" if block.ordered else "ul"
            items = "\n".join(
                f"{self._open('li')}{self.render_inline(item)}</li>" for item in block.items
            )
            return f"{self._open(tag)}\n{items}\n</{tag}>"
        if isinstance(block, CodeBlock):
            return f"{self._open('pre')}{self._text(block.text)}</pre>"
        if isinstance(block, BlockQuote):
            body = "<br>".join(self.render_inline(line) for line in block.lines)
            return f"{self._open('blockquote')}{body}</blockquote>"
        return block.text

    def render(self, document: Document) -> str:
        return "\n".join(self.render_block(block) for block in document.blocks)


class PlainTextRenderer:
    """
    Renders a Document as plain text.

    Headings and code blocks are dropped, links keep their text and
    emphasis markers disappear. Blocks are separated by newlines.
    """

    def render_inline(self, nodes: list[Inline]) -> str:
        parts = []
        for node in nodes:
            if isinstance(node, (Text, Code)):
                parts.append(node.text)
            else:
                parts.append(self.render_inline(node.children))
        return "".join(parts)

    def render(self, document: Document) -> str:
        parts = []
        for block in document.blocks:
            if isinstance(block, (Heading, CodeBlock)):
                continue
            if isinstance(block, Paragraph):
                parts.append(self.render_inline(block.children))
            elif isinstance(block, ListBlock):
                parts.extend(self.render_inline(item) for item in block.items)
            elif isinstance(block, BlockQuote):
                parts.extend(self.render_inline(line) for line in block.lines)
            elif isinstance(block, RawHtml):
                parts.append(block.text)
        return "\n".join(parts).strip()


# =============================================================================
# Public API
# =============================================================================


class MarkdownPreviewRenderer:
    """
    Note preview rendering with fixed settings.

    Args:
        escape_html: Escape source HTML and neutralise unsafe links
        preview_length: Maximum snippet length for note lists
        ellipsis: Appended to snippets that were truncated
        classes: CSS classes per tag for the HTML output
    """

    def __init__(
        self,
        escape_html: bool = True,
        preview_length: int = PREVIEW_LENGTH,
        ellipsis: str = PREVIEW_ELLIPSIS,
        classes: dict[str, str] | None = None,
    ) -> None:
        self.escape_html = escape_html
        self.preview_length = preview_length
        self.ellipsis = ellipsis
        self._html = HtmlRenderer(escape=escape_html, classes=classes)
        self._plain = PlainTextRenderer()

    def to_html(self, markdown: str | None) -> str:
        """Render Markdown as HTML."""
        return self._html.render(parse(markdown, raw_html=not self.escape_html))

    def to_plain_text(self, markdown: str | None, limit: int | None = None) -> str:
        """Render Markdown as trimmed plain text, cut to limit (default preview_length)."""
        text = self._plain.render(parse(markdown))
        return text[:self.preview_length if limit is None else limit]

    def preview(self, markdown: str | None) -> str:
        """Plain-text snippet with the ellipsis appended when it was cut short."""
        text = self._plain.render(parse(markdown))
        if len(text) <= self.preview_length:
            return text
        return text[:self.preview_length].rstrip() + self.ellipsis


_default_renderer = MarkdownPreviewRenderer()


def render_html(markdown: str | None, escape: bool = True) -> str:
    """Render Markdown as HTML (escaped unless escape=False)."""
    if escape:
        return _default_renderer.to_html(markdown)
    return MarkdownPreviewRenderer(escape_html=False).to_html(markdown)


def render_plain_text(markdown: str | None, limit: int = PREVIEW_LENGTH) -> str:
    """Render Markdown as plain text of at most limit characters."""
    return _default_renderer.to_plain_text(markdown, limit=limit)


def note_preview(markdown: str | None) -> str:
    """Snippet shown under a note title in list views."""
    return _default_renderer.preview(markdown)
