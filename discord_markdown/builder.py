"""
Helper functions to build an AST in fewer lines of code.

Composite constructors accept a list of elements, a single element, or a
string, which is shorthand for one plain text element:

    >>> from discord_markdown.builder import *
    >>> str(document([plain("generating "), bold("markdown"), plain(" is easy")]))
    'generating **markdown** is easy'

Empty content for a composite element raises InvalidConstructionError.
"""

from typing import Iterable, Optional, Tuple, Union

from .ast_nodes import (
    EmphasisType,
    InvalidConstructionError,
    MDBlockQuote,
    MDCodeBlock,
    MDCodeSpan,
    MDDocument,
    MDEmphasis,
    MDNode,
    MDText,
)

Content = Union[str, MDNode, Iterable[MDNode]]

__all__ = [
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
]


def _children(content: Content, owner: str) -> Tuple[MDNode, ...]:
    if isinstance(content, str):
        if not content:
            raise InvalidConstructionError(f"{owner}() requires non-empty text")
        return (MDText(content),)
    if isinstance(content, MDNode):
        return (content,)
    return tuple(content)


def document(content: Content = ()) -> MDDocument:
    """Create a document. Unlike elements, a document may be empty."""
    if isinstance(content, str) and not content:
        return MDDocument()
    return MDDocument(_children(content, "document"))


def plain(content: str) -> MDText:
    return MDText(content)


def italics_star(content: Content) -> MDEmphasis:
    return MDEmphasis(EmphasisType.ITALIC_STAR, _children(content, "italics_star"))


def italics_underscore(content: Content) -> MDEmphasis:
    return MDEmphasis(EmphasisType.ITALIC_UNDERSCORE, _children(content, "italics_underscore"))


def bold(content: Content) -> MDEmphasis:
    return MDEmphasis(EmphasisType.BOLD, _children(content, "bold"))


def underline(content: Content) -> MDEmphasis:
    return MDEmphasis(EmphasisType.UNDERLINE, _children(content, "underline"))


def strikethrough(content: Content) -> MDEmphasis:
    return MDEmphasis(EmphasisType.STRIKETHROUGH, _children(content, "strikethrough"))


def spoiler(content: Content) -> MDEmphasis:
    return MDEmphasis(EmphasisType.SPOILER, _children(content, "spoiler"))


def one_line_code(content: str) -> MDCodeSpan:
    return MDCodeSpan(content)


def multi_line_code(content: str, language: Optional[str] = None) -> MDCodeBlock:
    """
    Create a fenced code block.

    Args:
        content: Code, kept verbatim
        language: Optional language identifier such as "python" or "c++"

    Raises:
        InvalidConstructionError: If language contains whitespace, backticks
            or any other character that would break the opening fence line
    """
    return MDCodeBlock(content, language)


def block_quote(content: Content) -> MDBlockQuote:
    """Create a block quote. Each child is rendered on its own quoted line."""
    return MDBlockQuote(_children(content, "block_quote"))
