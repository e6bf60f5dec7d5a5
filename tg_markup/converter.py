"""Markdown to Telegram HTML conversion.

Pipeline: parse Markdown into a document tree (mistune), render the tree to
Telegram HTML, then split the HTML into messages that fit Telegram's limit.
"""

import logging

from tg_markup.config import CONFIG
from tg_markup.parser import parse_markdown
from tg_markup.renderer import render
from tg_markup.splitter import split_markup

LOGGER = logging.getLogger(__name__)


def markdown_to_html(markdown_text: str | None) -> str:
    """Convert Markdown to Telegram HTML (``parse_mode='HTML'``).

    Args:
        markdown_text: Input Markdown text

    Returns:
        Telegram HTML; empty string for empty or None input

    Examples:
        >>> markdown_to_html('# Title\\n\\nSome **bold** text')
        '<b>Title</b>\\n\\nSome <b>bold</b> text'
    """
    if not markdown_text:
        return ''
    return render(parse_markdown(markdown_text))


def markdown_to_chunks(markdown_text: str | None, max_length: int | None = None) -> list[str]:
    """Convert Markdown to Telegram HTML split into sendable messages.

    Args:
        markdown_text: Input Markdown text
        max_length: Maximum chunk length in UTF-16 code units
                    (default: ``CONFIG.max_chunk_length``, 4096)

    Returns:
        Ordered chunks to send one message each; empty list for empty input

    Raises:
        ChunkLimitError: If ``max_length`` cannot hold a wrapped code slice

    Examples:
        >>> for chunk in markdown_to_chunks(answer):
        ...     await bot.send_message(chat_id, chunk, parse_mode='HTML')
    """
    if max_length is None:
        max_length = CONFIG.max_chunk_length

    html = markdown_to_html(markdown_text)
    chunks = split_markup(html, max_length)
    if len(chunks) > 1:
        LOGGER.debug('Split %d chars of HTML into %d chunks', len(html), len(chunks))
    return chunks
