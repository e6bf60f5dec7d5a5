"""Splitting rendered Telegram HTML into length-bounded messages.

Code blocks get special treatment: a ``<pre><code>`` marker always forces a
cut, a block that fits is sent whole, and an oversized block is sliced with
every slice wrapped in its own ``<pre><code>…</code></pre>`` so each message
displays as code on its own. Everything else is cut at the length limit.

Lengths are UTF-16 code units, the unit of Telegram's 4096 limit.
"""

import logging

from tg_markup.utils import utf16_len

LOGGER = logging.getLogger(__name__)

PRE_CODE_OPEN = '<pre><code>'
PRE_CODE_CLOSE = '</code></pre>'
WRAPPER_OVERHEAD = len(PRE_CODE_OPEN) + len(PRE_CODE_CLOSE)

# A code slice must fit at least one astral character (2 UTF-16 units)
MIN_CHUNK_LENGTH = WRAPPER_OVERHEAD + 2


class ChunkLimitError(ValueError):
    """Raised when the chunk limit cannot hold a wrapped code slice."""


def _take(text: str, start: int, stop: int, budget: int) -> int:
    """Find the end of the longest ``text[start:end]`` within a UTF-16 budget.

    Never ends between the two halves of a surrogate pair: astral characters
    are counted as 2 units and taken whole or not at all.

    Args:
        text: Markup being split
        start: Slice start index
        stop: Upper bound for the end index
        budget: Maximum UTF-16 length of the slice

    Returns:
        End index (exclusive)
    """
    units = 0
    end = start
    while end < stop:
        size = 2 if ord(text[end]) > 0xFFFF else 1
        if units + size > budget:
            break
        units += size
        end += 1
    return end


def _safe_cut(text: str, start: int, end: int, stop: int) -> int:
    """Move a cut back so it does not land inside a tag or an HTML entity.

    Literal ``<`` and ``&`` are always escaped in rendered markup, so a raw
    ``<`` without its ``>`` (or ``&`` without ``;``) before ``end`` means the
    cut would split a tag or an entity. The cut then moves to the start of
    that token, unless that would leave an empty slice.

    Args:
        text: Markup being split
        start: Slice start index
        end: Candidate end index
        stop: End of the region; a cut there is always safe

    Returns:
        Adjusted end index, always greater than ``start``
    """
    if end >= stop:
        return end

    cut = end
    tag_start = text.rfind('<', start, cut)
    if tag_start != -1 and text.find('>', tag_start, cut) == -1:
        cut = tag_start

    entity_start = text.rfind('&', start, cut)
    if entity_start != -1 and text.find(';', entity_start, cut) == -1:
        cut = entity_start

    return cut if cut > start else end


def _split_code_block(markup: str, start: int, stop: int, max_length: int) -> list[str]:
    """Wrap the code payload ``markup[start:stop]`` into one or more chunks.

    Args:
        markup: Rendered markup
        start: Index of the first payload character
        stop: Index just past the payload
        max_length: Maximum UTF-16 length per chunk

    Returns:
        List of ``<pre><code>…</code></pre>`` chunks
    """
    payload = markup[start:stop]
    if utf16_len(payload) + WRAPPER_OVERHEAD <= max_length:
        return [f'{PRE_CODE_OPEN}{payload}{PRE_CODE_CLOSE}']

    slice_budget = max_length - WRAPPER_OVERHEAD
    slices = []
    pos = start
    while pos < stop:
        end = _safe_cut(markup, pos, _take(markup, pos, stop, slice_budget), stop)
        slices.append(f'{PRE_CODE_OPEN}{markup[pos:end]}{PRE_CODE_CLOSE}')
        pos = end

    LOGGER.debug('Code block of %d chars split into %d chunks', len(payload), len(slices))
    return slices


def split_markup(markup: str, max_length: int) -> list[str]:
    """Split Telegram HTML into chunks of at most ``max_length`` UTF-16 units.

    Single left-to-right scan:

    1. If no ``<pre><code>`` starts within the next ``max_length`` units,
       emit up to ``max_length`` units of plain markup.
    2. Otherwise emit the text before the marker as its own chunk, then the
       code block, whole or sliced (see module docstring). A marker with no
       ``</code></pre>`` runs to the end of the string.

    Joining the chunks and dropping the wrappers added around code slices
    gives back ``markup``. A plain-text cut can still fall inside a ``<b>``,
    ``<i>`` or ``<a>`` span, leaving that chunk with an unmatched tag.

    Args:
        markup: Rendered Telegram HTML
        max_length: Maximum chunk length in UTF-16 code units

    Returns:
        Ordered chunks; empty list for empty markup

    Raises:
        ChunkLimitError: If ``max_length`` is below ``MIN_CHUNK_LENGTH``

    Examples:
        >>> split_markup('Hello', 4096)
        ['Hello']
        >>> split_markup('', 4096)
        []
    """
    if max_length < MIN_CHUNK_LENGTH:
        raise ChunkLimitError(
            f'max_length must be at least {MIN_CHUNK_LENGTH} (wrapper overhead '
            f'{WRAPPER_OVERHEAD} plus room for one astral character), got {max_length}'
        )

    chunks: list[str] = []
    text_end = len(markup)
    pos = 0

    while pos < text_end:
        window_end = _take(markup, pos, text_end, max_length)
        marker = markup.find(PRE_CODE_OPEN, pos)

        # No code block within reach: plain cut
        if marker == -1 or marker >= window_end:
            end = _safe_cut(markup, pos, window_end, text_end)
            chunks.append(markup[pos:end])
            pos = end
            continue

        # Code block boundaries always force a cut
        if marker > pos:
            chunks.append(markup[pos:marker])

        payload_start = marker + len(PRE_CODE_OPEN)
        payload_end = markup.find(PRE_CODE_CLOSE, payload_start)
        if payload_end == -1:
            LOGGER.debug('Unterminated code block at %d, taking rest of text', marker)
            payload_end = text_end
            pos = text_end
        else:
            pos = payload_end + len(PRE_CODE_CLOSE)

        chunks.extend(_split_code_block(markup, payload_start, payload_end, max_length))

    return chunks
