"""Document tree consumed by the HTML renderer.

Any Markdown parser can feed the renderer as long as an adapter maps its
native AST onto these nodes (see ``tg_markup.parser`` for the mistune one).

Every node keeps its children in a keyword-only ``children`` list, so leaf
attributes stay positional:

    >>> Heading(2, children=[Text('Title')])
    Heading(children=[Text(children=[], content='Title')], level=2)

``Node`` itself is a generic container. The renderer treats it, and any
subclass whose ``kind`` it does not know, by rendering the children only.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar, Literal


@dataclass
class Node:
    """Generic container node."""

    kind: ClassVar[str] = 'node'

    children: list[Node] = field(default_factory=list, kw_only=True)


@dataclass
class Document(Node):
    """Root of a parsed document."""

    kind: ClassVar[str] = 'document'


@dataclass
class Text(Node):
    kind: ClassVar[str] = 'text'

    content: str


@dataclass
class Emphasis(Node):
    kind: ClassVar[str] = 'emphasis'

    style: Literal['bold', 'italic']


@dataclass
class CodeInline(Node):
    kind: ClassVar[str] = 'code_inline'

    content: str


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    ``language`` is kept from the fence info string but the Telegram HTML
    output does not use it.
    """

    kind: ClassVar[str] = 'code_block'

    content: str
    language: str | None = None


@dataclass
class Heading(Node):
    kind: ClassVar[str] = 'heading'

    level: int = 1


@dataclass
class Paragraph(Node):
    kind: ClassVar[str] = 'paragraph'


@dataclass
class List(Node):
    """Ordered or bullet list; children are ``ListItem`` nodes."""

    kind: ClassVar[str] = 'list'

    ordered: bool = False


@dataclass
class ListItem(Node):
    kind: ClassVar[str] = 'list_item'


@dataclass
class Link(Node):
    kind: ClassVar[str] = 'link'

    href: str


@dataclass
class LineBreak(Node):
    kind: ClassVar[str] = 'line_break'


@dataclass(frozen=True)
class TableRow:
    """One table row with cells already flattened to plain text."""

    cells: Sequence[str]
    is_header: bool = False


@dataclass
class Table(Node):
    """Table whose rows are rendered as a monospace block.

    Cells are plain strings: inline formatting inside a cell is discarded
    when the parser adapter builds the node.
    """

    kind: ClassVar[str] = 'table'

    rows: list[TableRow] = field(default_factory=list)
