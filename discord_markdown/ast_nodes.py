"""
AST Node Classes for the Discord Markdown Parser

This module defines the Abstract Syntax Tree node classes that represent
the structure of a parsed (or hand-built) chat message.

Nodes are immutable: every composite node owns a tuple of its children and
nothing holds a reference back to its parent. Two trees compare equal when
they have the same node types, payloads and children, recursively.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, Optional, Tuple


class NodeType(Enum):
    """Enumeration of all AST node types."""
    DOCUMENT = "document"
    TEXT = "text"
    EMPHASIS = "emphasis"
    CODE_SPAN = "code_span"
    CODE_BLOCK = "code_block"
    BLOCK_QUOTE = "block_quote"


class EmphasisType(Enum):
    """Types of emphasis formatting."""
    BOLD = "bold"
    ITALIC_STAR = "italic_star"
    UNDERLINE = "underline"
    ITALIC_UNDERSCORE = "italic_underscore"
    STRIKETHROUGH = "strikethrough"
    SPOILER = "spoiler"


# Longest delimiter first for each character, so `**` wins over `*`
EMPHASIS_DELIMITERS: Dict[EmphasisType, str] = {
    EmphasisType.BOLD: "**",
    EmphasisType.ITALIC_STAR: "*",
    EmphasisType.UNDERLINE: "__",
    EmphasisType.ITALIC_UNDERSCORE: "_",
    EmphasisType.STRIKETHROUGH: "~~",
    EmphasisType.SPOILER: "||",
}

CODE_SPAN_DELIMITER = "`"
CODE_BLOCK_DELIMITER = "```"
BLOCK_QUOTE_PREFIX = "> "

LANGUAGE_PATTERN = re.compile(r"[A-Za-z0-9+#.\-]+")


class InvalidConstructionError(ValueError):
    """Raised when a node is built from content that would make an invalid tree."""


class MDNode(ABC):
    """Base class for all Markdown AST nodes."""

    node_type: ClassVar[NodeType]

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary representation."""
        pass

    def walk(self) -> Iterator["MDNode"]:
        """
        Iterate over this node and all of its descendants.

        Nodes are yielded depth-first, children in document order. An explicit
        stack is used, so arbitrarily deep trees do not hit the recursion limit.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(getattr(node, "children", ())))

    def __str__(self) -> str:
        from .renderer import to_text

        return to_text(self)


def _validate_children(owner: str, children: Tuple[Any, ...], allow_empty: bool = False) -> None:
    if not children and not allow_empty:
        raise InvalidConstructionError(f"{owner} requires at least one child element")
    for child in children:
        if not isinstance(child, MDNode):
            raise InvalidConstructionError(f"{owner} child must be an MDNode, got {type(child).__name__}")
        if isinstance(child, MDDocument):
            raise InvalidConstructionError(f"{owner} cannot contain a document")


@dataclass(frozen=True)
class MDDocument(MDNode):
    """Root document node containing all top-level elements."""

    node_type: ClassVar[NodeType] = NodeType.DOCUMENT

    children: Tuple[MDNode, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))
        _validate_children("MDDocument", self.children, allow_empty=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "children": [child.to_dict() for child in self.children]
        }


@dataclass(frozen=True)
class MDText(MDNode):
    """Plain text node."""

    node_type: ClassVar[NodeType] = NodeType.TEXT

    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "content": self.content
        }


@dataclass(frozen=True)
class MDEmphasis(MDNode):
    """Emphasis node for bold, italic, underline, strikethrough and spoiler text."""

    node_type: ClassVar[NodeType] = NodeType.EMPHASIS

    emphasis_type: EmphasisType
    children: Tuple[MDNode, ...]

    def __post_init__(self):
        if not isinstance(self.emphasis_type, EmphasisType):
            raise InvalidConstructionError(f"Unknown emphasis type: {self.emphasis_type!r}")
        object.__setattr__(self, "children", tuple(self.children))
        _validate_children(f"MDEmphasis({self.emphasis_type.value})", self.children)

    @property
    def delimiter(self) -> str:
        """Delimiter wrapped around the children in markdown text."""
        return EMPHASIS_DELIMITERS[self.emphasis_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "emphasis_type": self.emphasis_type.value,
            "children": [child.to_dict() for child in self.children]
        }


@dataclass(frozen=True)
class MDCodeSpan(MDNode):
    """Inline code span node. Content is never interpreted as markup."""

    node_type: ClassVar[NodeType] = NodeType.CODE_SPAN

    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "content": self.content
        }


@dataclass(frozen=True)
class MDCodeBlock(MDNode):
    """
    Fenced code block node with optional language identifier.

    An empty language is stored as None. Any other language must match
    LANGUAGE_PATTERN, otherwise it would break the opening fence line.
    """

    node_type: ClassVar[NodeType] = NodeType.CODE_BLOCK

    content: str
    language: Optional[str] = None

    def __post_init__(self):
        if self.language == "":
            object.__setattr__(self, "language", None)
        elif self.language is not None and not (
            isinstance(self.language, str) and LANGUAGE_PATTERN.fullmatch(self.language)
        ):
            raise InvalidConstructionError(f"Invalid code block language: {self.language!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "content": self.content,
            "language": self.language
        }


@dataclass(frozen=True)
class MDBlockQuote(MDNode):
    """Block quote node. Only ever built by hand, the parser never produces it."""

    node_type: ClassVar[NodeType] = NodeType.BLOCK_QUOTE

    children: Tuple[MDNode, ...]

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))
        _validate_children("MDBlockQuote", self.children)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.node_type.value,
            "children": [child.to_dict() for child in self.children]
        }
