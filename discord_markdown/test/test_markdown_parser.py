"""
Test Suite for the Discord Markdown Parser

Covers rule priority, code spans, nested emphasis, fallback to plain text
and the nesting depth limit.
"""

import unittest

from discord_markdown import MarkdownParser, markdown_to_plain_text, normalize_markdown, parse, parse_markdown
from discord_markdown.ast_nodes import MDCodeBlock, MDCodeSpan, MDDocument, MDText
from discord_markdown.builder import (
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
from discord_markdown.inline_parser import InlineParser


class TestParseDocument(unittest.TestCase):
    """Test parsing of whole messages."""

    def test_mixed_message(self):
        """Test a message with italics, inline code and plain text."""
        doc = parse("You can write *italics text*, `*inline code*`, and more!")

        self.assertEqual(
            doc,
            document([
                plain("You can write "),
                italics_star([plain("italics text")]),
                plain(", "),
                one_line_code("*inline code*"),
                plain(", and more!"),
            ]),
        )

    def test_nested_styles(self):
        """Test emphasis nested inside other emphasis."""
        doc = parse("Of course __*nested* styles__ are supported!")

        self.assertEqual(
            doc,
            document([
                plain("Of course "),
                underline([italics_star("nested"), plain(" styles")]),
                plain(" are supported!"),
            ]),
        )

    def test_empty_input(self):
        """Test that empty input gives an empty document."""
        self.assertEqual(parse(""), MDDocument())
        self.assertEqual(parse("").children, ())

    def test_bold_with_italics(self):
        """Test underscore italics inside bold."""
        self.assertEqual(
            parse("**hello _world_**"),
            document([bold([plain("hello "), italics_underscore("world")])]),
        )

    def test_italics_at_start_of_bold(self):
        """Test that ***italics* in bold** is bold containing italics."""
        self.assertEqual(
            parse("***italics* in bold**"),
            document([bold([italics_star("italics"), plain(" in bold")])]),
        )

    def test_italics_at_start_of_underline(self):
        """Test that ___italics_ in underline__ is underline containing italics."""
        self.assertEqual(
            parse("___italics_ in underline__"),
            document([underline([italics_underscore("italics"), plain(" in underline")])]),
        )

    def test_element_sequences(self):
        """Test several elements side by side."""
        self.assertEqual(
            parse("**hello** _world_"),
            document([bold("hello"), plain(" "), italics_underscore("world")]),
        )
        self.assertEqual(
            parse("`__hello__` ||world||"),
            document([one_line_code("__hello__"), plain(" "), spoiler("world")]),
        )
        self.assertEqual(parse("hello**world**"), document([plain("hello"), bold("world")]))
        self.assertEqual(parse("`hello`**world**"), document([one_line_code("hello"), bold("world")]))

    def test_four_levels_of_nesting(self):
        """Test that different delimiters nest in each other."""
        self.assertEqual(
            parse("**__~~||x||~~__**"),
            document([bold([underline([strikethrough([spoiler("x")])])])]),
        )

    def test_parse_markdown_alias(self):
        """Test that parse_markdown is the same entry point."""
        text = "**a** _b_"
        self.assertEqual(parse_markdown(text), parse(text))


class TestEmphasisRules(unittest.TestCase):
    """Test each emphasis rule on its own."""

    def test_each_delimiter(self):
        """Test every emphasis delimiter wrapping plain text."""
        test_cases = [
            ("*text*", italics_star),
            ("_text_", italics_underscore),
            ("**text**", bold),
            ("__text__", underline),
            ("~~text~~", strikethrough),
            ("||text||", spoiler),
        ]

        for markdown, constructor in test_cases:
            with self.subTest(markdown=markdown):
                self.assertEqual(parse(markdown), document([constructor([plain("text")])]))

    def test_double_delimiter_is_not_two_singles(self):
        """Test that ** and __ are read as one delimiter."""
        self.assertEqual(parse("**text**"), document([bold("text")]))
        self.assertNotEqual(parse("**text**"), document([italics_star([italics_star("text")])]))
        self.assertEqual(parse("__text__"), document([underline("text")]))

    def test_combined_emphasis(self):
        """Test underline wrapping italics."""
        self.assertEqual(parse("__*text*__"), document([underline([italics_star("text")])]))

    def test_shortest_span_wins(self):
        """Test that the first closing delimiter ends the span."""
        self.assertEqual(
            parse("*a* and *b*"),
            document([italics_star("a"), plain(" and "), italics_star("b")]),
        )

    def test_intraword_underscores(self):
        """Test that underscores inside words are emphasis delimiters."""
        self.assertEqual(
            parse("foo_bar_baz"),
            document([plain("foo"), italics_underscore("bar"), plain("baz")]),
        )


class TestCodeRules(unittest.TestCase):
    """Test code spans and fenced code blocks."""

    def test_code_span_is_verbatim(self):
        """Test that markup inside a code span is not parsed."""
        self.assertEqual(parse("`**not bold**`"), document([one_line_code("**not bold**")]))
        self.assertEqual(parse("`*text*`"), document([MDCodeSpan("*text*")]))

    def test_empty_code_span_is_text(self):
        """Test that two backticks are plain text."""
        self.assertEqual(parse("``"), document([plain("``")]))

    def test_unclosed_code_span(self):
        """Test that an unclosed backtick is plain text."""
        self.assertEqual(parse("`*text*"), document([plain("`"), italics_star("text")]))

    def test_code_span_inside_emphasis(self):
        """Test a code span nested in bold text."""
        self.assertEqual(
            parse("**`code` here**"),
            document([bold([one_line_code("code"), plain(" here")])]),
        )

    def test_emphasis_closes_inside_code_span(self):
        """Test that the closing delimiter search does not skip code spans."""
        self.assertEqual(
            parse("**`**`**"),
            document([bold("`"), plain("`**")]),
        )

    def test_code_block(self):
        """Test fenced code blocks with and without language."""
        test_cases = [
            ("```\nhello\nworld\n```", MDCodeBlock("hello\nworld\n")),
            ("```hello world```", MDCodeBlock("hello world")),
            ("``` hello\nworld```", MDCodeBlock(" hello\nworld")),
            ("```js\nhello\nworld\n```", MDCodeBlock("hello\nworld\n", "js")),
            ("```x86asm\nhello```", MDCodeBlock("hello", "x86asm")),
            ("```c++\nint x;```", MDCodeBlock("int x;", "c++")),
            ("```js code```", MDCodeBlock("js code")),
        ]

        for markdown, expected in test_cases:
            with self.subTest(markdown=markdown):
                self.assertEqual(parse(markdown), document([expected]))

    def test_code_block_followed_by_text(self):
        """Test that parsing continues after the closing fence."""
        self.assertEqual(
            parse("```\nhello\n```world"),
            document([multi_line_code("hello\n"), plain("world")]),
        )

    def test_code_block_is_verbatim(self):
        """Test that markup inside a code block is not parsed."""
        self.assertEqual(
            parse("```md\n**bold** _it_ `code`\n```"),
            document([multi_line_code("**bold** _it_ `code`\n", "md")]),
        )


class TestFallbackToText(unittest.TestCase):
    """Test that unmatched markup stays plain text."""

    def test_unclosed_delimiters(self):
        """Test delimiters without a closing pair."""
        test_cases = ["**text", "text__", "*text", "text*", "||text", "~~text", "_", "~", "|"]

        for markdown in test_cases:
            with self.subTest(markdown=markdown):
                self.assertEqual(parse(markdown), document([plain(markdown)]))

    def test_unclosed_then_closed(self):
        """Test that text up to the next match is merged into one plain node."""
        self.assertEqual(
            parse("~~struck and ||hidden||"),
            document([plain("~~struck and "), spoiler("hidden")]),
        )

    def test_block_quote_is_text(self):
        """Test that block quote syntax is never parsed."""
        self.assertEqual(parse("> block quote"), document([plain("> block quote")]))
        self.assertEqual(
            parse("> quoted\n> **bold**"),
            document([plain("> quoted\n> "), bold("bold")]),
        )

    def test_backslash_is_text(self):
        """Test that escape sequences are not interpreted."""
        self.assertEqual(
            parse("\\*not italics\\*"),
            document([plain("\\"), italics_star("not italics\\")]),
        )

    def test_plain_text_is_not_fragmented(self):
        """Test that a text-only message is a single plain node."""
        text = "just some text, with punctuation! and\nnew lines."
        self.assertEqual(parse(text), document([plain(text)]))


class TestNestingDepth(unittest.TestCase):
    """Test the nesting depth limit."""

    def test_content_below_limit_is_text(self):
        """Test that content nested deeper than the limit is kept as text."""
        self.assertEqual(
            parse("**a *b* c**", max_nesting_depth=1),
            document([bold("a *b* c")]),
        )
        self.assertEqual(
            parse("**__~~||x||~~__**", max_nesting_depth=2),
            document([bold([underline("~~||x||~~")])]),
        )

    def test_limit_logged(self):
        """Test that reaching the limit is logged."""
        with self.assertLogs("discord_markdown.inline_parser", level="DEBUG") as logs:
            parse("**a *b* c**", max_nesting_depth=1)

        self.assertTrue(any("Nesting depth" in line for line in logs.output))

    def test_inline_parser_directly(self):
        """Test the inline parser with its own depth setting."""
        parser = InlineParser(max_nesting_depth=1)

        self.assertEqual(parser.parse_inline_content(""), [])
        self.assertEqual(parser.parse_inline_content("||a ||b||"), [spoiler("a "), plain("b||")])
        self.assertEqual(parser.parse_inline_content("*_a_*"), [italics_star("_a_")])


class TestParserProperties(unittest.TestCase):
    """Test general properties of parse results."""

    samples = [
        "",
        "plain",
        "You can write *italics text*, `*inline code*`, and more!",
        "**__~~||x||~~__**",
        "```py\nprint('*')\n``` and `code`",
        "*_*_*_~~||",
    ]

    def test_deterministic(self):
        """Test that parsing the same input twice gives equal trees."""
        for markdown in self.samples:
            with self.subTest(markdown=markdown):
                self.assertEqual(parse(markdown), parse(markdown))

    def test_leaves_have_no_children(self):
        """Test that text and code nodes never hold children."""
        for markdown in self.samples:
            with self.subTest(markdown=markdown):
                for node in parse(markdown).walk():
                    if isinstance(node, (MDText, MDCodeSpan, MDCodeBlock)):
                        self.assertFalse(hasattr(node, "children"))
                    else:
                        self.assertIsInstance(node.children, tuple)

    def test_composites_are_never_empty(self):
        """Test that parsed emphasis always has content."""
        for markdown in self.samples:
            with self.subTest(markdown=markdown):
                for node in parse(markdown).walk():
                    if not isinstance(node, MDDocument) and hasattr(node, "children"):
                        self.assertGreater(len(node.children), 0)


class TestMarkdownParser(unittest.TestCase):
    """Test the MarkdownParser facade."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = MarkdownParser()

    def test_default_options(self):
        """Test default option values."""
        self.assertEqual(self.parser.max_nesting_depth, 100)
        self.assertEqual(self.parser.get_option("max_nesting_depth"), 100)
        self.assertIsNone(self.parser.get_option("missing"))

    def test_rejects_non_string(self):
        """Test that only strings are parsed."""
        for value in [None, 42, b"**bytes**"]:
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    self.parser.parse(value)

    def test_invalid_options(self):
        """Test that invalid depth limits are rejected."""
        for value in [0, -1, 201, "10", True, 1.5]:
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    MarkdownParser({"max_nesting_depth": value})

    def test_unknown_option_ignored(self):
        """Test that unknown options only produce a warning."""
        with self.assertLogs("discord_markdown.config", level="WARNING"):
            parser = MarkdownParser({"strict_mode": True})

        self.assertIsNone(parser.get_option("strict_mode"))

    def test_get_ast_json(self):
        """Test dictionary representation of a parsed message."""
        self.assertEqual(
            self.parser.get_ast_json("**hi** `x`"),
            {
                "type": "document",
                "children": [
                    {
                        "type": "emphasis",
                        "emphasis_type": "bold",
                        "children": [{"type": "text", "content": "hi"}],
                    },
                    {"type": "text", "content": " "},
                    {"type": "code_span", "content": "x"},
                ],
            },
        )

    def test_parse_to_markdown(self):
        """Test normalization of fenced code without a newline."""
        self.assertEqual(self.parser.parse_to_markdown("```code```"), "```\ncode```")
        self.assertEqual(normalize_markdown("**a** _b_"), "**a** _b_")

    def test_parse_to_plain_text(self):
        """Test stripping markup from a message."""
        self.assertEqual(self.parser.parse_to_plain_text("**bold** and `code`"), "bold and code")
        self.assertEqual(markdown_to_plain_text("||secret|| ~~old~~ __new__"), "secret old new")


if __name__ == "__main__":
    unittest.main()
