"""Monospace rendering of table nodes."""

from collections.abc import Sequence

from tg_markup.nodes import TableRow

CELL_SEPARATOR = ' | '
HEADER_SEPARATOR = '-+-'


def format_table(rows: Sequence[TableRow]) -> str:
    """Render table rows as fixed-width plain text for a ``<pre>`` block.

    Rows may have different cell counts; short rows are padded with empty
    cells up to the widest row. A line of dashes follows every header row:

        Name  | Age
        ------+----
        Bob   | 25

    The result is raw text (every line ends with a newline) and must be
    escaped by the caller.

    Args:
        rows: Table rows with plain-text cells

    Returns:
        Aligned table text
    """
    num_cols = max((len(row.cells) for row in rows), default=0)

    col_widths = [0] * num_cols
    for row in rows:
        for i, cell in enumerate(row.cells):
            col_widths[i] = max(col_widths[i], len(cell))

    lines = []
    for row in rows:
        cells = [
            (row.cells[i] if i < len(row.cells) else '').ljust(col_widths[i])
            for i in range(num_cols)
        ]
        lines.append(CELL_SEPARATOR.join(cells) + '\n')

        if row.is_header:
            lines.append(HEADER_SEPARATOR.join('-' * w for w in col_widths) + '\n')

    return ''.join(lines)
