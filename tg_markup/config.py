from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tg_markup.splitter import MIN_CHUNK_LENGTH


class Config(BaseSettings):
    if Path('.env').exists():
        model_config = SettingsConfigDict(
            env_prefix='TG_MARKUP_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
        )
    else:
        model_config = SettingsConfigDict(env_prefix='TG_MARKUP_')

    # Only needed to send chunks from the command line
    bot_token: str | None = None

    # Telegram allows max 4096 characters (UTF-16 code units) per message
    max_chunk_length: int = 4096

    # Logging level
    logging_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'INFO'

    @field_validator('max_chunk_length')
    def check_chunk_length(cls, value: int) -> int:
        if value < MIN_CHUNK_LENGTH:
            raise ValueError(f'max_chunk_length must be at least {MIN_CHUNK_LENGTH}')
        return value


CONFIG = Config()
