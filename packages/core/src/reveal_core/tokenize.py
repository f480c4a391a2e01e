from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any

import mistune

from reveal_core.identity import TokenIdSequence
from reveal_core.models import BlockType, Token, TokenKind

_markdown = mistune.create_markdown(renderer="ast")

_SKIPPED_BLOCKS = {"blank_line", "thematic_break", "block_html"}


@dataclass(frozen=True)
class TextBlock:
    block_type: BlockType
    text: str
    heading_level: int | None = None


def tokenize_article(content: str, ids: TokenIdSequence | None = None) -> list[Token]:
    """
    Split article markup into word tokens and structural markers.

    - Headings, paragraphs and list items become runs of word tokens.
    - Inline markup (emphasis, links, code spans) contributes only its text;
      raw HTML tags are dropped and character references are decoded.
    - A paragraph break follows every top-level block except the last one;
      consecutive list items are separated by a line break.
    """
    ids = ids or TokenIdSequence()
    tokens: list[Token] = []

    groups = _lex_blocks(content)
    for group_index, group in enumerate(groups):
        for item_index, block in enumerate(group):
            if item_index > 0:
                tokens.append(Token(id=ids.next_id(), text="", kind=TokenKind.LINE_BREAK))
            tokens.extend(_words(block, ids))
        if group_index < len(groups) - 1:
            tokens.append(Token(id=ids.next_id(), text="", kind=TokenKind.PARAGRAPH_BREAK))

    return tokens


def _words(block: TextBlock, ids: TokenIdSequence) -> list[Token]:
    return [
        Token(
            id=ids.next_id(),
            text=word,
            kind=TokenKind.WORD,
            block=block.block_type,
            heading_level=block.heading_level,
        )
        for word in block.text.split()
    ]


def _lex_blocks(content: str) -> list[list[TextBlock]]:
    """Top-level blocks in document order; a list is one group of list-item blocks."""
    groups: list[list[TextBlock]] = []
    for node in _markdown(content):
        node_type = node.get("type")
        if node_type in _SKIPPED_BLOCKS:
            continue

        if node_type == "heading":
            level = int(node.get("attrs", {}).get("level", 1))
            group = [TextBlock(BlockType.HEADING, _inline_text(node), heading_level=level)]
        elif node_type == "list":
            group = _list_items(node)
        else:
            group = [TextBlock(BlockType.TEXT, _inline_text(node))]

        group = [b for b in group if b.text.strip()]
        if group:
            groups.append(group)
    return groups


def _list_items(list_node: dict[str, Any]) -> list[TextBlock]:
    items: list[TextBlock] = []
    for item in list_node.get("children", []):
        own_text: list[str] = []
        nested: list[TextBlock] = []
        for child in item.get("children", []):
            if child.get("type") == "list":
                nested.extend(_list_items(child))
            else:
                own_text.append(_inline_text(child))
        items.append(TextBlock(BlockType.LIST_ITEM, " ".join(own_text)))
        items.extend(nested)
    return items


def _inline_text(node: dict[str, Any]) -> str:
    """Concatenate the text of a node; markup characters are not part of any node's text."""
    node_type = node.get("type")
    if node_type in ("softbreak", "linebreak"):
        return "\n"
    if node_type == "inline_html":
        return ""
    if "children" in node:
        parts = [_inline_text(child) for child in node["children"]]
        if node_type in ("block_quote", "list", "list_item"):
            return "\n".join(parts)
        return "".join(parts)
    raw = node.get("raw")
    if not isinstance(raw, str):
        return ""
    return html.unescape(raw) if node_type == "text" else raw
