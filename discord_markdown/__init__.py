"""
Discord Markdown Parser v1.0

Parser and builder for the markdown subset understood by Discord chat
messages: *italics*, _italics_, **bold**, __underline__, ~~strikethrough~~,
||spoiler||, `inline code`, ```fenced code``` and (build only) block quotes.

This module provides:
- Parsing of message text into an immutable AST
- Builder helpers to assemble an AST by hand
- Markdown rendering (canonical text) and plain text rendering

Usage:
    from discord_markdown import parse, to_text
    from discord_markdown.builder import bold, document, plain, underline

    doc = parse("You can write *italics text*, `*inline code*`, and more!")

    text = to_text(document([plain("it is "), underline([bold("easy")])]))
    # "it is __**easy**__"

Known limitations:
- Block quotes are never parsed, `> quote` stays plain text
- Escape sequences are not interpreted, a backslash is plain text
- Underscores inside words (foo_bar_baz) are treated as emphasis delimiters
- Deeply nested emphasis may parse differently than in the Discord client
"""

from .ast_nodes import *
from .builder import (
    block_quote,
    bold,
    document,
    italics_star,
    italics_underscore,
    multi_line_code,
    one_line_code,
    plain,
    spoiler,
    strikethrough,
    underline,
)
from .inline_parser import InlineParser
from .parser import MarkdownParser, markdown_to_plain_text, normalize_markdown, parse, parse_markdown
from .renderer import MarkdownRenderer, PlainTextRenderer, to_plain_text, to_text

__version__ = "1.0.0"
__all__ = [
    "parse",
    "parse_markdown",
    "normalize_markdown",
    "markdown_to_plain_text",
    "to_text",
    "to_plain_text",
    "MarkdownParser",
    "InlineParser",
    "MarkdownRenderer",
    "PlainTextRenderer",
    "InvalidConstructionError",
    # Builder
    "document",
    "plain",
    "italics_star",
    "italics_underscore",
    "bold",
    "underline",
    "strikethrough",
    "spoiler",
    "one_line_code",
    "multi_line_code",
    "block_quote",
    # AST Nodes
    "NodeType",
    "EmphasisType",
    "MDNode",
    "MDDocument",
    "MDText",
    "MDEmphasis",
    "MDCodeSpan",
    "MDCodeBlock",
    "MDBlockQuote",
]
