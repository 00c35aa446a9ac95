"""
Inline Parser for the Discord Markdown Parser

This module turns raw message text into a list of AST nodes. Rules are tried
at every position in a fixed priority order, and emphasis content is parsed
recursively. Anything that does not match a rule is kept as plain text, so
parsing never fails.
"""

import logging
import re
from typing import Callable, List, Optional, Tuple

from .ast_nodes import (
    CODE_BLOCK_DELIMITER,
    CODE_SPAN_DELIMITER,
    EMPHASIS_DELIMITERS,
    EmphasisType,
    MDCodeBlock,
    MDCodeSpan,
    MDEmphasis,
    MDNode,
    MDText,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_NESTING_DEPTH = 100

# Every rule starts with one of these characters
SPECIAL_CHARS = frozenset("`*_~|")

RuleResult = Tuple[Optional[MDNode], int]


class InlineParser:
    """
    Parser for inline Markdown elements.

    Rule priority: code block > code span > bold > italic (*) > underline >
    italic (_) > strikethrough > spoiler. Code content is captured verbatim,
    emphasis content is parsed again with the same rules.
    """

    def __init__(self, max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH):
        self.max_nesting_depth = max_nesting_depth

        # Tried in order at every special character
        self._rules: Tuple[Callable[[str, int, int], RuleResult], ...] = (
            self._try_parse_code_block,
            self._try_parse_code_span,
            self._try_parse_emphasis,
        )

        # Compile regex patterns for efficiency
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Compile regex patterns used for inline parsing."""
        # Optional language identifier on the opening fence line
        self.code_block_header_pattern = re.compile(r"([A-Za-z0-9+#.\-]*)\n")

    def parse_inline_content(self, content: str) -> List[MDNode]:
        """
        Parse inline content and return list of inline nodes.

        Args:
            content: Raw text content to parse for inline elements

        Returns:
            List of MDNode objects representing inline elements
        """
        if not content:
            return []

        return self._parse_inline_elements(content, 0)

    def _parse_inline_elements(self, content: str, depth: int) -> List[MDNode]:
        """Parse inline elements with proper precedence."""
        if depth >= self.max_nesting_depth:
            logger.debug(f"Nesting depth {depth} reached, keeping {len(content)} chars as text")
            return [MDText(content)]

        nodes: List[MDNode] = []
        pos = 0

        while pos < len(content):
            if content[pos] in SPECIAL_CHARS:
                matched = False
                for rule in self._rules:
                    node, new_pos = rule(content, pos, depth)
                    if node is not None:
                        nodes.append(node)
                        pos = new_pos
                        matched = True
                        break
                if matched:
                    continue

            text, pos = self._parse_text(content, pos)
            nodes.append(text)

        return self._merge_adjacent_text_nodes(nodes)

    def _try_parse_code_block(self, content: str, pos: int, depth: int) -> RuleResult:
        """Try to parse a fenced code block (```lang\\ncode```) at the current position."""
        span = self._find_span(content, pos, CODE_BLOCK_DELIMITER)
        if span is None:
            return None, pos

        code_content, end_pos = span
        language = None
        header = self.code_block_header_pattern.match(code_content)
        if header:
            language = header.group(1) or None
            code_content = code_content[header.end():]

        return MDCodeBlock(code_content, language), end_pos

    def _try_parse_code_span(self, content: str, pos: int, depth: int) -> RuleResult:
        """Try to parse an inline code span at the current position."""
        span = self._find_span(content, pos, CODE_SPAN_DELIMITER)
        if span is None:
            return None, pos

        code_content, end_pos = span
        return MDCodeSpan(code_content), end_pos

    def _try_parse_emphasis(self, content: str, pos: int, depth: int) -> RuleResult:
        """Try each emphasis delimiter in priority order at the current position."""
        for emphasis_type, delimiter in EMPHASIS_DELIMITERS.items():
            emphasis, new_pos = self._parse_emphasis(content, pos, depth, emphasis_type, delimiter)
            if emphasis is not None:
                return emphasis, new_pos

        return None, pos

    def _parse_emphasis(
        self, content: str, pos: int, depth: int, emphasis_type: EmphasisType, delimiter: str
    ) -> RuleResult:
        """Parse a single kind of emphasis and its nested content."""
        span = self._find_span(content, pos, delimiter)
        if span is None:
            return None, pos

        emphasis_content, end_pos = span
        children = self._parse_inline_elements(emphasis_content, depth + 1)
        return MDEmphasis(emphasis_type, children), end_pos

    def _find_span(self, content: str, pos: int, delimiter: str) -> Optional[Tuple[str, int]]:
        """
        Find the shortest non-empty span wrapped in delimiter starting at pos.

        Returns:
            Tuple of (span content, position after closing delimiter) or None
        """
        if not content.startswith(delimiter, pos):
            return None

        span_start = pos + len(delimiter)
        # Closing delimiter is searched one char later, the span can't be empty
        closing_pos = content.find(delimiter, span_start + 1)
        if closing_pos == -1:
            return None

        return content[span_start:closing_pos], closing_pos + len(delimiter)

    def _parse_text(self, content: str, pos: int) -> Tuple[MDText, int]:
        """Parse one character and then regular text until next special character."""
        start_pos = pos
        pos += 1

        while pos < len(content) and content[pos] not in SPECIAL_CHARS:
            pos += 1

        return MDText(content[start_pos:pos]), pos

    def _merge_adjacent_text_nodes(self, nodes: List[MDNode]) -> List[MDNode]:
        """Merge adjacent text nodes into single nodes."""
        if not nodes:
            return nodes

        merged: List[MDNode] = []
        text_parts: List[str] = []

        for node in nodes:
            if isinstance(node, MDText):
                text_parts.append(node.content)
            else:
                if text_parts:
                    merged.append(MDText("".join(text_parts)))
                    text_parts = []
                merged.append(node)

        # Add any remaining text
        if text_parts:
            merged.append(MDText("".join(text_parts)))

        return merged
