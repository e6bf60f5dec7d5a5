"""Markdown parsing: mistune AST to ``tg_markup.nodes`` document tree.

The renderer only knows the node contract, so this module is the single
place that depends on mistune's token format. Tokens without a dedicated
converter become generic ``Node`` containers (or ``Text`` for raw-only
tokens) and are rendered through their children.

Raw HTML in the Markdown, even tags Telegram understands such as ``<b>``
or ``<a>``, is kept as literal text and escaped on render rather than
interpreted, so the output only ever contains tags the renderer emits.
"""

from __future__ import annotations

from collections.abc import Callable
import html
import logging
from typing import Any, cast

import mistune

from tg_markup.nodes import (
    CodeBlock,
    CodeInline,
    Document,
    Emphasis,
    Heading,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Table,
    TableRow,
    Text,
)

LOGGER = logging.getLogger(__name__)

Token = dict[str, Any]

# Telegram HTML has no strikethrough or checkbox markup worth mapping to,
# so only tables are enabled on top of CommonMark
PLUGINS = ['table']


def _attrs(token: Token) -> dict[str, Any]:
    attrs = token.get('attrs', {})
    return attrs if isinstance(attrs, dict) else {}


def _convert_children(token: Token) -> list[Node]:
    children = token.get('children', [])
    if not isinstance(children, list):
        children = [children]
    return [node for child in children if (node := _convert(child)) is not None]


def _plain_text(token: Token | str) -> str:
    """Flatten a token to plain text, dropping any inline formatting."""
    if isinstance(token, str):
        return token
    if token.get('type') in ('softbreak', 'linebreak'):
        return ' '
    if 'children' in token:
        return ''.join(_plain_text(child) for child in token['children'])
    raw = str(token.get('raw', ''))
    # Code spans keep entity references literally
    return html.unescape(raw) if token.get('type') == 'text' else raw


# Inline elements


def _text(token: Token) -> Node:
    # mistune keeps entity references (&amp;, &copy;, &#35;) undecoded
    return Text(html.unescape(str(token.get('raw', ''))))


def _strong(token: Token) -> Node:
    return Emphasis('bold', children=_convert_children(token))


def _emphasis(token: Token) -> Node:
    return Emphasis('italic', children=_convert_children(token))


def _codespan(token: Token) -> Node:
    return CodeInline(str(token.get('raw', '')))


def _link(token: Token) -> Node:
    url = str(_attrs(token).get('url', ''))
    children = _convert_children(token)
    if not url:
        # Nothing to point at: keep the text only
        return Node(children=children)
    return Link(url, children=children or [Text(url)])


def _image(token: Token) -> Node:
    """Render an image as a link to its source, labelled with the alt text."""
    url = str(_attrs(token).get('url', ''))
    alt = _plain_text(token).strip()
    if not url:
        return Text(alt)
    return Link(url, children=[Text(alt or url)])


def _line_break(token: Token) -> Node:
    # Soft breaks too: chat users expect single newlines to be kept
    return LineBreak()


def _inline_html(token: Token) -> Node:
    # Shown literally (escaped on render) instead of interpreted
    return Text(str(token.get('raw', '')))


# Block elements


def _paragraph(token: Token) -> Node:
    return Paragraph(children=_convert_children(token))


def _heading(token: Token) -> Node:
    level = _attrs(token).get('level', 1)
    return Heading(level if isinstance(level, int) else 1, children=_convert_children(token))


def _block_html(token: Token) -> Node:
    return Paragraph(children=[Text(str(token.get('raw', '')).rstrip('\n'))])


def _block_code(token: Token) -> Node:
    info = _attrs(token).get('info')
    language = info.split()[0] if isinstance(info, str) and info.strip() else None
    code = str(token.get('raw') or '')
    if code.endswith('\n'):
        code = code[:-1]
    return CodeBlock(code, language)


def _list(token: Token) -> Node:
    ordered = bool(_attrs(token).get('ordered', False))
    return List(ordered, children=_convert_children(token))


def _list_item(token: Token) -> Node:
    """Convert a list item, keeping nested blocks off the item's first line."""
    children: list[Node] = []
    previous_type = None
    for child in token.get('children', []):
        node = _convert(child)
        if node is None:
            continue
        if previous_type == 'block_text':
            children.append(LineBreak())
        children.append(node)
        previous_type = child.get('type')
    return ListItem(children=children)


def _table(token: Token) -> Node:
    """Collect head and body rows; cells are flattened to plain text."""
    rows: list[TableRow] = []
    for section in token.get('children', []):
        if section.get('type') == 'table_head':
            # Head cells are direct children of table_head (no table_row)
            cells = [_plain_text(cell).strip() for cell in section.get('children', [])]
            rows.append(TableRow(cells, is_header=True))
        elif section.get('type') == 'table_body':
            for row in section.get('children', []):
                cells = [_plain_text(cell).strip() for cell in row.get('children', [])]
                rows.append(TableRow(cells))
    return Table(rows=rows)


def _skip(token: Token) -> None:
    return None


_CONVERTERS: dict[str, Callable[[Token], Node | None]] = {
    'text': _text,
    'strong': _strong,
    'emphasis': _emphasis,
    'codespan': _codespan,
    'link': _link,
    'image': _image,
    'linebreak': _line_break,
    'softbreak': _line_break,
    'inline_html': _inline_html,
    'block_html': _block_html,
    'paragraph': _paragraph,
    'heading': _heading,
    'block_code': _block_code,
    'list': _list,
    'list_item': _list_item,
    'table': _table,
    'blank_line': _skip,
}


def _convert(token: Token | str) -> Node | None:
    """Convert one mistune token to a node (None for tokens with no output)."""
    if isinstance(token, str):
        return Text(token)

    token_type = token.get('type', '')
    converter = _CONVERTERS.get(token_type)
    if converter is not None:
        return converter(token)

    # Fallback: container for children, or literal raw text
    if 'children' in token:
        return Node(children=_convert_children(token))
    if isinstance(token.get('raw'), str):
        return Text(token['raw'])
    LOGGER.debug('Dropping %r token without content', token_type)
    return None


def parse_markdown(markdown_text: str) -> Document:
    """Parse Markdown into a document tree.

    Args:
        markdown_text: Raw Markdown (for example a model answer)

    Returns:
        Document root; empty for empty input

    Examples:
        >>> parse_markdown('Hi').children
        [Paragraph(children=[Text(children=[], content='Hi')])]
    """
    if not markdown_text:
        return Document()

    md = mistune.create_markdown(renderer='ast', plugins=PLUGINS)

    # Normalize line endings
    text = markdown_text.replace('\r\n', '\n').replace('\r', '\n')

    tokens = cast(list[Token], md(text))
    return Document(children=[node for tok in tokens if (node := _convert(tok)) is not None])
