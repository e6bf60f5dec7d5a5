"""Delivery of rendered Markdown answers to a Telegram chat."""

import logging

from aiogram import Bot
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramAPIError

from tg_markup.converter import markdown_to_chunks

LOGGER = logging.getLogger(__name__)


async def send_markdown(
    bot: Bot,
    chat_id: int | str,
    markdown_text: str,
    *,
    max_length: int | None = None,
    stop_on_error: bool = False,
) -> int:
    """Send Markdown as one or more Telegram HTML messages, in order.

    All chunks are produced before the first send. Whitespace-only chunks
    (such as the blank run between two code blocks) are skipped because
    Telegram rejects empty messages.

    Args:
        bot: aiogram bot used for sending
        chat_id: Target chat
        markdown_text: Raw Markdown answer
        max_length: Maximum chunk length (default: ``CONFIG.max_chunk_length``)
        stop_on_error: Re-raise the first send failure instead of skipping
                       the failed chunk

    Returns:
        Number of chunks delivered

    Raises:
        TelegramAPIError: If a send fails and ``stop_on_error`` is set

    Example:
        >>> await send_markdown(bot, message.chat.id, answer)
    """
    chunks = markdown_to_chunks(markdown_text, max_length)

    sent = 0
    for index, chunk in enumerate(chunks):
        if not chunk.strip():
            LOGGER.debug('Skipping blank chunk %d of %d', index + 1, len(chunks))
            continue
        try:
            await bot.send_message(chat_id, chunk, parse_mode=ParseMode.HTML)
        except TelegramAPIError as e:
            LOGGER.warning('Failed to send chunk %d of %d: %s', index + 1, len(chunks), e)
            LOGGER.debug('Content: %s', chunk)
            if stop_on_error:
                raise
            continue
        sent += 1

    LOGGER.info('Sent %d of %d chunks to %s', sent, len(chunks), chat_id)
    return sent
