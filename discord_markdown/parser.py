"""
Main Markdown Parser for the Discord Markdown Parser

This module provides the MarkdownParser class that ties together option
handling, inline parsing and rendering, plus convenience functions.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .ast_nodes import MDDocument
from .config import load_options, validate_options
from .inline_parser import InlineParser
from .renderer import to_plain_text, to_text

logger = logging.getLogger(__name__)


class MarkdownParser:
    """
    Main Markdown parser.

    Parsing is total: every string produces a document. Markup that does
    not match a rule (unclosed delimiters, block quotes, escapes) is kept as
    plain text.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """
        Initialize the Markdown parser.

        Args:
            options: Optional parser configuration, see config.DEFAULT_OPTIONS

        Raises:
            ValueError: If an option is invalid
        """
        self.options = validate_options(options)
        self.max_nesting_depth = self.options["max_nesting_depth"]

        self.inline_parser = InlineParser(max_nesting_depth=self.max_nesting_depth)

    @classmethod
    def from_config(cls, configPath: Union[str, Path], section: str = "markdown") -> "MarkdownParser":
        """Create a parser with options read from a TOML file."""
        return cls(load_options(configPath, section))

    def parse(self, markdown_text: str) -> MDDocument:
        """
        Parse Markdown text into an AST.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            MDDocument representing the parsed document

        Raises:
            ValueError: If input is not a string
        """
        if not isinstance(markdown_text, str):
            raise ValueError("Input must be a string")

        document = MDDocument(self.inline_parser.parse_inline_content(markdown_text))
        logger.debug(f"Parsed {len(markdown_text)} chars into {len(document.children)} top-level elements")
        return document

    def parse_to_markdown(self, markdown_text: str) -> str:
        """
        Parse Markdown text and render back to canonical Markdown.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            Normalized Markdown string
        """
        return to_text(self.parse(markdown_text))

    def parse_to_plain_text(self, markdown_text: str) -> str:
        """
        Parse Markdown text and strip all markup.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            Text without delimiters
        """
        return to_plain_text(self.parse(markdown_text))

    def get_ast_json(self, markdown_text: str) -> Dict[str, Any]:
        """
        Parse Markdown text and return AST as JSON-serializable dictionary.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            Dictionary representation of the AST
        """
        return self.parse(markdown_text).to_dict()

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a parser option.

        Args:
            key: Option name
            default: Default value if option not found

        Returns:
            Option value or default
        """
        return self.options.get(key, default)


# Convenience functions for quick parsing

def parse(text: str, **options) -> MDDocument:
    """
    Parse Markdown text into an AST.

    Args:
        text: Markdown text to parse
        **options: Parser options

    Returns:
        MDDocument representing the parsed document
    """
    parser = MarkdownParser(options)
    return parser.parse(text)


parse_markdown = parse


def normalize_markdown(text: str, **options) -> str:
    """
    Normalize Markdown text by parsing and re-rendering.

    Args:
        text: Markdown text to normalize
        **options: Parser options

    Returns:
        Normalized Markdown string
    """
    parser = MarkdownParser(options)
    return parser.parse_to_markdown(text)


def markdown_to_plain_text(text: str, **options) -> str:
    """
    Convert Markdown text to plain text without markup.

    Args:
        text: Markdown text to convert
        **options: Parser options

    Returns:
        Plain text string
    """
    parser = MarkdownParser(options)
    return parser.parse_to_plain_text(text)
