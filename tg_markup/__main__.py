import argparse
import asyncio
import logging
import sys

from aiogram import Bot

from tg_markup.config import CONFIG
from tg_markup.converter import markdown_to_chunks
from tg_markup.sender import send_markdown
from tg_markup.splitter import MIN_CHUNK_LENGTH

LOGGER = logging.getLogger(__name__)

CHUNK_SEPARATOR = '-' * 40


async def send_to_chat(token: str, chat_id: str, markdown_text: str, max_length: int) -> int:
    # parse_mode is set per message by send_markdown
    async with Bot(token) as bot:
        return await send_markdown(bot, chat_id, markdown_text, max_length=max_length)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog='tg_markup', description='Render Markdown to Telegram HTML chunks.'
    )
    parser.add_argument(
        'file',
        nargs='?',
        type=argparse.FileType('r', encoding='utf-8'),
        default=sys.stdin,
        help='Markdown file (default: stdin).',
    )
    parser.add_argument(
        '-l',
        '--max-length',
        type=int,
        default=CONFIG.max_chunk_length,
        help='Maximum chunk length in UTF-16 code units.',
    )
    parser.add_argument('--chat-id', help='Send the chunks to this chat instead of printing.')

    args = parser.parse_args(argv)
    if args.max_length < MIN_CHUNK_LENGTH:
        parser.error(f'--max-length must be at least {MIN_CHUNK_LENGTH}')
    with args.file:
        markdown_text = args.file.read()

    if args.chat_id:
        if not CONFIG.bot_token:
            parser.error('TG_MARKUP_BOT_TOKEN must be set to send messages')
        sent = asyncio.run(
            send_to_chat(CONFIG.bot_token, args.chat_id, markdown_text, args.max_length)
        )
        LOGGER.info('Delivered %d messages', sent)
        return 0

    for chunk in markdown_to_chunks(markdown_text, args.max_length):
        print(chunk)
        print(CHUNK_SEPARATOR)
    return 0


if __name__ == '__main__':
    logging.basicConfig(level=getattr(logging, CONFIG.logging_level), stream=sys.stderr)
    sys.exit(main())
