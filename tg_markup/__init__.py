"""Markdown to Telegram HTML converter with message chunking.

This package converts Markdown (typically a language model's answer) into the
restricted HTML dialect Telegram accepts with ``parse_mode='HTML'`` and splits
the result into messages that respect Telegram's 4096 character limit.

Example:
    >>> from tg_markup import markdown_to_chunks
    >>> chunks = markdown_to_chunks("**Bold** and *italic* text")
    >>> print(chunks[0])
    <b>Bold</b> and <i>italic</i> text
"""

from tg_markup.converter import markdown_to_chunks, markdown_to_html
from tg_markup.parser import parse_markdown
from tg_markup.renderer import HtmlRenderer, render
from tg_markup.splitter import ChunkLimitError, split_markup

__version__ = '0.1.0'

__all__ = [
    'markdown_to_html',
    'markdown_to_chunks',
    'parse_markdown',
    'render',
    'split_markup',
    'HtmlRenderer',
    'ChunkLimitError',
]
