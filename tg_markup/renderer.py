"""Renderer from the document tree to Telegram HTML.

Telegram's HTML parse mode understands only a handful of tags, so the
renderer maps richer Markdown structure onto them:

- headings become bold lines (there is no heading tag)
- lists are flattened to ``•`` / ``1.`` prefixes (no block indentation)
- tables become aligned monospace text inside ``<pre>``

Every method returns the markup of its own subtree; the renderer keeps no
state between calls and one instance can be shared by any number of threads.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import string

from tg_markup.nodes import (
    CodeBlock,
    CodeInline,
    Emphasis,
    Heading,
    Link,
    List,
    Node,
    Table,
    Text,
)
from tg_markup.table import format_table
from tg_markup.utils import escape_attr, escape_text

LOGGER = logging.getLogger(__name__)

_EMPHASIS_TAGS = {'bold': 'b', 'italic': 'i'}


class HtmlRenderer:
    """Render ``tg_markup.nodes`` trees to Telegram HTML.

    Dispatch is by ``node.kind``: a node of kind ``heading`` is rendered by
    ``_render_heading``. Kinds without a method fall back to rendering their
    children, so parser extensions never lose content.
    """

    BULLET = '• '

    def render(self, node: Node) -> str:
        """Render a node and its subtree.

        For a ``Document`` root the leading and trailing blank runs left by
        block spacing are stripped; any other node is rendered as is.

        Args:
            node: Root of the subtree to render

        Returns:
            Telegram HTML markup
        """
        return self._get_method(node.kind)(node)

    def _get_method(self, kind: str) -> Callable[[Node], str]:
        """Get render method by node kind with fallback to children."""
        method = getattr(self, f'_render_{kind}', None)
        if method is None:
            LOGGER.debug('No renderer for node kind %r, rendering children', kind)
            return self._render_children
        return method

    def _render_children(self, node: Node) -> str:
        return ''.join(self.render(child) for child in node.children)

    # Plain containers
    _render_node = _render_children
    _render_list_item = _render_children

    def _render_document(self, node: Node) -> str:
        # ASCII whitespace only: NBSP and ideographic spaces are content
        return self._render_children(node).strip(string.whitespace)

    # Inline elements

    def _render_text(self, node: Text) -> str:
        return escape_text(node.content)

    def _render_emphasis(self, node: Emphasis) -> str:
        tag = _EMPHASIS_TAGS.get(node.style)
        if tag is None:
            return self._render_children(node)
        return f'<{tag}>{self._render_children(node)}</{tag}>'

    def _render_code_inline(self, node: CodeInline) -> str:
        return f'<code>{escape_text(node.content)}</code>'

    def _render_link(self, node: Link) -> str:
        return f'<a href="{escape_attr(node.href)}">{self._render_children(node)}</a>'

    def _render_line_break(self, node: Node) -> str:
        return '\n'

    # Block elements

    def _render_paragraph(self, node: Node) -> str:
        return self._render_children(node) + '\n\n'

    def _render_heading(self, node: Heading) -> str:
        # Same output for every level: Telegram has no heading markup
        return f'<b>{self._render_children(node)}</b>\n\n'

    def _render_code_block(self, node: CodeBlock) -> str:
        return f'<pre><code>{escape_text(node.content)}</code></pre>\n\n'

    def _render_list(self, node: List) -> str:
        lines = []
        for index, item in enumerate(node.children, start=1):
            prefix = f'{index}. ' if node.ordered else self.BULLET
            lines.append(f'{prefix}{self.render(item)}\n')
        return ''.join(lines) + '\n'

    def _render_table(self, node: Table) -> str:
        return f'<pre>{escape_text(format_table(node.rows))}</pre>\n\n'


_RENDERER = HtmlRenderer()


def render(node: Node) -> str:
    """Render a document tree (or any subtree) to Telegram HTML.

    Examples:
        >>> from tg_markup.nodes import Heading, Text
        >>> render(Heading(2, children=[Text('Title')]))
        '<b>Title</b>\\n\\n'
    """
    return _RENDERER.render(node)
