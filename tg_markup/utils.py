"""Text helpers for rendering Telegram HTML."""


def utf16_len(text: str) -> int:
    """Calculate length in UTF-16 code units (for Telegram API).

    Telegram counts its message length limit in UTF-16 code units, so chunk
    sizes are measured with this function rather than ``len()``.

    Args:
        text: Input text string

    Returns:
        Length in UTF-16 code units

    Examples:
        >>> utf16_len("Hello")
        5
        >>> utf16_len("🌍")
        2
        >>> utf16_len("Привет")
        6
    """
    return len(text.encode('utf-16-le')) // 2


def escape_text(text: str) -> str:
    """Escape literal text for embedding in Telegram HTML.

    ``&`` is replaced first so the entities produced for ``<`` and ``>`` are
    not escaped twice. Not idempotent: ``escape_text('&amp;')`` is
    ``'&amp;amp;'``, so call it exactly once per literal segment.

    Examples:
        >>> escape_text('<script>&foo')
        '&lt;script&gt;&amp;foo'
    """
    return text.replace('&', '&amp;').replace('<', '&lt;').replace('>', '&gt;')


def escape_attr(text: str) -> str:
    """Escape an attribute value (quotes included) for Telegram HTML."""
    return escape_text(text).replace('"', '&quot;')
