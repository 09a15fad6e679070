"""
=============================================================================
MARKDOWN RENDERER
=============================================================================

Converts lesson markdown into HTML with a fixed sequence of whole-text
passes. This is not a markdown parser: there is no syntax tree, and every
pass works on the output of the one before it.

=============================================================================
PASS ORDER
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        RENDERING PIPELINE                           │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   markdown text                                                      │
    │        │                                                             │
    │        ▼                                                             │
    │   1. headings        # .. ####        → <h1> .. <h4>                 │
    │   2. fenced blocks   ```lang ... ```  → <div class="code-example">   │
    │   3. inline code     `x`              → <code>x</code>               │
    │   4. bold            **x**            → <strong>x</strong>           │
    │   5. lists           - x / 1. x       → <li>x</li> (only - wrapped)  │
    │   6. links           [t](u)           → <a href="u">t</a>            │
    │   7. tables          | a | b |        → <table class="course-table"> │
    │        │                                                             │
    │        ▼                                                             │
    │   HTML                                                               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The order matters. Headings run before code blocks, so a "# comment" line
inside a fenced block becomes an <h1>. Code content is not escaped, so
"<vector>" in a C++ snippet reaches the browser as a tag. Later passes
see the HTML produced by earlier ones.

=============================================================================
TOTALITY
=============================================================================

Every pass terminates on any input. An unterminated fence, a lone
backtick or an unpaired "**" simply stops that pass and leaves the rest of
the text as it was.

=============================================================================
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple


FENCE = "```"
BACKTICK = "`"
BOLD_MARKER = "**"
CODE_CLOSE = "</code>"

TABLE_OPEN = '<div class="table-container"><table class="course-table">'
TABLE_CLOSE = "</table></div>"

HIGHLIGHTED_LANGUAGES = ("cpp", "c++")

HEADING_PATTERNS = [
    (re.compile(r"^#\s+([^\r\n]+)", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"^##\s+([^\r\n]+)", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^###\s+([^\r\n]+)", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^####\s+([^\r\n]+)", re.MULTILINE), r"<h4>\1</h4>"),
]

UNORDERED_ITEM = re.compile(r"^-\s+([^\r\n]+)", re.MULTILINE)
ITEM_RUN = re.compile(r"(<li>.*?</li>\s*)+")
ORDERED_ITEM = re.compile(r"^\d+\.\s+([^\r\n]+)", re.MULTILINE)
LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

TITLE = re.compile(r"^#\s+([^\r\n]+)", re.MULTILINE)
TAG = re.compile(r"#(\w+)", re.ASCII)

DEFAULT_TITLE = "Untitled Lesson"


# =============================================================================
# TOKENS
# =============================================================================
#
# Each scan function returns one of these (or None when the construct is
# absent). start/end are indices into the text that was scanned; end is
# exclusive and includes the closing delimiter.
#
# =============================================================================

@dataclass(frozen=True)
class FencedBlock:
    start: int
    end: int
    language: str
    code: str

    def to_html(self) -> str:
        if self.language in HIGHLIGHTED_LANGUAGES:
            return f'<div class="code-example"><pre><code class="language-cpp">{self.code}</code></pre></div>'
        return f'<div class="code-example"><pre><code>{self.code}</code></pre></div>'


@dataclass(frozen=True)
class InlineCode:
    start: int
    end: int
    code: str

    def to_html(self) -> str:
        return f"<code>{self.code}</code>"


@dataclass(frozen=True)
class BoldSpan:
    start: int
    end: int
    text: str

    def to_html(self) -> str:
        return f"<strong>{self.text}</strong>"


@dataclass(frozen=True)
class TableRow:
    cells: Tuple[str, ...]

    def to_html(self) -> str:
        return "<tr>" + "".join(f"<td>{cell}</td>" for cell in self.cells) + "</tr>"


# =============================================================================
# SCAN FUNCTIONS
# =============================================================================

def scan_fenced_block(text: str, pos: int = 0) -> Optional[FencedBlock]:
    """
    Find the next ``` ... ``` block at or after pos.

    When a newline appears before the closing fence, the rest of the
    opening line (trimmed of spaces and tabs) is the language and the code
    starts on the next line. Otherwise everything between the fences is
    code. Code is trimmed of surrounding whitespace.
    """
    start = text.find(FENCE, pos)
    if start == -1:
        return None

    close = text.find(FENCE, start + len(FENCE))
    if close == -1:
        return None

    language_start = start + len(FENCE)
    newline = text.find("\n", language_start)

    if newline != -1 and newline < close:
        language = text[language_start:newline].strip(" \t")
        code = text[newline + 1:close]
    else:
        language = ""
        code = text[language_start:close]

    return FencedBlock(
        start=start,
        end=close + len(FENCE),
        language=language,
        code=code.strip(" \t\r\n"),
    )


def follows_code_block(text: str, index: int) -> bool:
    """
    True when the backtick at index sits right after a closing </code>.

    The comparison window is six characters starting one before index,
    one character shorter than "</code>".
    """
    return index > 0 and text[index - 1:index + 5] == CODE_CLOSE


def scan_inline_code(text: str, pos: int = 0) -> Optional[InlineCode]:
    """Find the next `span` at or after pos."""
    while True:
        start = text.find(BACKTICK, pos)
        if start == -1:
            return None

        if follows_code_block(text, start):
            pos = start + 1
            continue

        end = text.find(BACKTICK, start + 1)
        if end == -1:
            return None

        return InlineCode(start=start, end=end + 1, code=text[start + 1:end])


def scan_bold_span(text: str, pos: int = 0) -> Optional[BoldSpan]:
    """Find the next **span** at or after pos."""
    start = text.find(BOLD_MARKER, pos)
    if start == -1:
        return None

    end = text.find(BOLD_MARKER, start + len(BOLD_MARKER))
    if end == -1:
        return None

    return BoldSpan(start=start, end=end + len(BOLD_MARKER), text=text[start + 2:end])


def is_table_line(line: str) -> bool:
    return line.startswith("|") and line.endswith("|")


def is_table_separator(line: str) -> bool:
    """Only "|", "-" and spaces. The empty line qualifies too."""
    return all(char in "|- " for char in line)


def scan_table_row(line: str) -> Optional[TableRow]:
    """
    Split a "| a | b |" line into trimmed, bold-substituted cells.

        >>> scan_table_row("| **Port** | 8080 |").cells
        ('<strong>Port</strong>', '8080')
    """
    if not is_table_line(line):
        return None

    # Leading piece is before the first "|", trailing one after the last.
    pieces = line.split("|")[1:-1]
    return TableRow(cells=tuple(render_bold(piece.strip(" \t")) for piece in pieces))


def split_lines(text: str) -> List[str]:
    """Split on "\\n" without producing an empty last line for a final newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


# =============================================================================
# PASSES
# =============================================================================

def render_headings(text: str) -> str:
    for pattern, replacement in HEADING_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def render_fenced_blocks(text: str) -> str:
    pos = 0
    while True:
        block = scan_fenced_block(text, pos)
        if block is None:
            return text
        html = block.to_html()
        text = text[:block.start] + html + text[block.end:]
        pos = block.start + len(html)


def render_inline_code(text: str) -> str:
    pos = 0
    while True:
        span = scan_inline_code(text, pos)
        if span is None:
            return text
        html = span.to_html()
        text = text[:span.start] + html + text[span.end:]
        pos = span.start + len(html)


def render_bold(text: str) -> str:
    pos = 0
    while True:
        span = scan_bold_span(text, pos)
        if span is None:
            return text
        text = text[:span.start] + span.to_html() + text[span.end:]
        # Resume inside the closing tag; it holds no "**".
        pos = span.start + len("<strong>") + len(span.text)


def render_lists(text: str) -> str:
    text = UNORDERED_ITEM.sub(r"<li>\1</li>", text)
    text = ITEM_RUN.sub(r"<ul>\g<0></ul>", text)
    # Ordered items become <li> but are never wrapped.
    return ORDERED_ITEM.sub(r"<li>\1</li>", text)


def render_links(text: str) -> str:
    return LINK.sub(r'<a href="\2">\1</a>', text)


def render_tables(text: str) -> str:
    """
    Group consecutive "|...|" lines into one table.

    Only the line right after the first row of a group is checked for a
    separator. Non-table lines are re-emitted with a trailing newline.
    """
    lines = split_lines(text)
    output = []
    in_table = False

    i = 0
    while i < len(lines):
        line = lines[i]
        row = scan_table_row(line)

        if row is not None:
            first_row = not in_table
            if first_row:
                in_table = True
                output.append(TABLE_OPEN)
            output.append(row.to_html())

            if first_row and i + 1 < len(lines) and is_table_separator(lines[i + 1]):
                i += 1
        else:
            if in_table:
                in_table = False
                output.append(TABLE_CLOSE)
            output.append(line + "\n")

        i += 1

    if in_table:
        output.append(TABLE_CLOSE)

    return "".join(output)


# =============================================================================
# METADATA
# =============================================================================

def extract_title(text: str) -> str:
    """Text of the first level-1 heading, or "Untitled Lesson"."""
    match = TITLE.search(text)
    if match:
        return match.group(1)
    return DEFAULT_TITLE


def extract_tags(text: str) -> List[str]:
    """
    Every #word token in order, duplicates kept.

    Headings count too: "# Sockets" has no tag (space after "#") but
    "#include" yields "include".
    """
    return TAG.findall(text)


class MarkdownRenderer:
    """
    Applies the rendering passes in their fixed order.

        >>> MarkdownRenderer().render("# Title")
        '<h1>Title</h1>\\n'

    The renderer holds no state between calls and is safe to share.
    """

    passes: Tuple[Callable[[str], str], ...] = (
        render_headings,
        render_fenced_blocks,
        render_inline_code,
        render_bold,
        render_lists,
        render_links,
        render_tables,
    )

    def render(self, markdown: str) -> str:
        html = markdown
        for render_pass in self.passes:
            html = render_pass(html)
        return html


# =============================================================================
# MODULE SUMMARY
# =============================================================================
#
# scan_*     find one construct and return a frozen token (or None)
# render_*   one whole-text pass each, driven by the scanners
# extract_*  title and tags, computed from the raw markdown
#
# The output is deterministic and depends on pass order.
# =============================================================================
