"""
Renderers for the Discord Markdown Parser

This module converts an AST (parsed or hand-built) back into text:
canonical markdown with MarkdownRenderer, or text without any markup
with PlainTextRenderer.

Rendering walks the tree with an explicit stack instead of recursion, so
trees of any depth can be rendered.
"""

from typing import List, Tuple, Union

from .ast_nodes import (
    BLOCK_QUOTE_PREFIX,
    CODE_BLOCK_DELIMITER,
    CODE_SPAN_DELIMITER,
    MDBlockQuote,
    MDCodeBlock,
    MDCodeSpan,
    MDDocument,
    MDEmphasis,
    MDNode,
    MDText,
)


class _BlockQuoteEnd:
    """Stack marker: everything rendered since `start` belongs to a block quote."""

    __slots__ = ("start",)

    def __init__(self, start: int):
        self.start = start


_StackItem = Union[MDNode, str, _BlockQuoteEnd]


class BaseRenderer:
    """
    Renderer skeleton shared by all text renderers.

    Subclasses decide what goes around emphasis content, how leaves look
    and how block quote content is decorated.
    """

    def render(self, node: MDNode) -> str:
        """
        Render a document or any element to text.

        Args:
            node: The node to render

        Returns:
            Rendered text
        """
        if not isinstance(node, MDNode):
            raise ValueError(f"Expected MDNode, got {type(node).__name__}")

        parts: List[str] = []
        stack: List[_StackItem] = [node]

        while stack:
            item = stack.pop()

            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, _BlockQuoteEnd):
                quoted = self._render_block_quote("".join(parts[item.start:]))
                del parts[item.start:]
                parts.append(quoted)
            elif isinstance(item, MDDocument):
                stack.extend(reversed(item.children))
            elif isinstance(item, MDEmphasis):
                opening, closing = self._emphasis_delimiters(item)
                stack.append(closing)
                stack.extend(reversed(item.children))
                stack.append(opening)
            elif isinstance(item, MDBlockQuote):
                stack.append(_BlockQuoteEnd(len(parts)))
                # Each child starts on its own line
                for index in range(len(item.children) - 1, -1, -1):
                    stack.append(item.children[index])
                    if index > 0:
                        stack.append("\n")
            elif isinstance(item, MDText):
                parts.append(self._render_text(item))
            elif isinstance(item, MDCodeSpan):
                parts.append(self._render_code_span(item))
            elif isinstance(item, MDCodeBlock):
                parts.append(self._render_code_block(item))
            else:
                raise ValueError(f"Unknown node type: {type(item).__name__}")

        return "".join(parts)

    def _emphasis_delimiters(self, node: MDEmphasis) -> Tuple[str, str]:
        raise NotImplementedError

    def _render_text(self, node: MDText) -> str:
        return node.content

    def _render_code_span(self, node: MDCodeSpan) -> str:
        raise NotImplementedError

    def _render_code_block(self, node: MDCodeBlock) -> str:
        raise NotImplementedError

    def _render_block_quote(self, content: str) -> str:
        raise NotImplementedError


class MarkdownRenderer(BaseRenderer):
    """
    Renderer that converts AST back to canonical markdown.

    Payloads are written verbatim, nothing is escaped. Plain text containing
    delimiter characters may therefore parse into a different tree.
    """

    def _emphasis_delimiters(self, node: MDEmphasis) -> Tuple[str, str]:
        return node.delimiter, node.delimiter

    def _render_code_span(self, node: MDCodeSpan) -> str:
        return f"{CODE_SPAN_DELIMITER}{node.content}{CODE_SPAN_DELIMITER}"

    def _render_code_block(self, node: MDCodeBlock) -> str:
        lang = node.language or ""
        return f"{CODE_BLOCK_DELIMITER}{lang}\n{node.content}{CODE_BLOCK_DELIMITER}"

    def _render_block_quote(self, content: str) -> str:
        return "\n".join(BLOCK_QUOTE_PREFIX + line for line in content.split("\n"))


class PlainTextRenderer(BaseRenderer):
    """Renderer that drops all markup and keeps only the text."""

    def _emphasis_delimiters(self, node: MDEmphasis) -> Tuple[str, str]:
        return "", ""

    def _render_code_span(self, node: MDCodeSpan) -> str:
        return node.content

    def _render_code_block(self, node: MDCodeBlock) -> str:
        return node.content

    def _render_block_quote(self, content: str) -> str:
        return content


_markdown_renderer = MarkdownRenderer()
_plain_text_renderer = PlainTextRenderer()


def to_text(node: MDNode) -> str:
    """Render a document or element to canonical markdown text."""
    return _markdown_renderer.render(node)


def to_plain_text(node: MDNode) -> str:
    """Render a document or element to text without markup."""
    return _plain_text_renderer.render(node)
