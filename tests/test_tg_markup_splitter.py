"""Tests for tg_markup splitter - chunk limits and code block handling.

Main requirement: every chunk fits the limit (in UTF-16 code units) and
code blocks are cut out and re-wrapped so each chunk displays on its own.
"""

import pytest

from tg_markup.splitter import (
    MIN_CHUNK_LENGTH,
    PRE_CODE_CLOSE,
    PRE_CODE_OPEN,
    WRAPPER_OVERHEAD,
    ChunkLimitError,
    split_markup,
)
from tg_markup.utils import utf16_len


def _assert_chunks_within_limit(chunks: list[str], max_length: int) -> None:
    for i, chunk in enumerate(chunks):
        assert utf16_len(chunk) <= max_length, (
            f'Chunk {i} exceeds limit: {utf16_len(chunk)} > {max_length}'
        )


def _unwrap(chunks: list[str]) -> str:
    """Join chunks, dropping wrappers between consecutive code slices."""
    return ''.join(chunks).replace(PRE_CODE_CLOSE + PRE_CODE_OPEN, '')


# ============================================================================
# Plain markup
# ============================================================================


def test_empty_input_gives_no_chunks() -> None:
    assert split_markup('', 4096) == []


def test_short_input_single_chunk() -> None:
    markup = 'Hello, <b>world!</b>'
    assert split_markup(markup, 4096) == [markup]


def test_exact_limit_not_split() -> None:
    markup = 'b' * 4096
    assert split_markup(markup, 4096) == [markup]


def test_long_plain_text_split_at_limit() -> None:
    markup = 'a' * 10000
    chunks = split_markup(markup, 4096)

    assert [len(c) for c in chunks] == [4096, 4096, 1808]
    assert ''.join(chunks) == markup, 'Reconstructed text mismatch'


def test_pre_without_code_is_plain_markup() -> None:
    """Tables render as bare <pre> and are cut like plain text."""
    markup = '<pre>' + 'x' * 50 + '</pre>'
    chunks = split_markup(markup, 40)
    _assert_chunks_within_limit(chunks, 40)
    assert ''.join(chunks) == markup


# ============================================================================
# Code blocks
# ============================================================================


def test_code_block_forces_cut_and_is_rewrapped() -> None:
    payload = 'Y' * 10000
    markup = f'X{PRE_CODE_OPEN}{payload}{PRE_CODE_CLOSE}Z'
    chunks = split_markup(markup, 100)

    assert chunks[0] == 'X'
    assert chunks[-1] == 'Z'
    _assert_chunks_within_limit(chunks, 100)

    interior = chunks[1:-1]
    for chunk in interior:
        assert chunk.startswith(PRE_CODE_OPEN) and chunk.endswith(PRE_CODE_CLOSE)
        inner = chunk[len(PRE_CODE_OPEN) : -len(PRE_CODE_CLOSE)]
        assert 0 < len(inner) <= 100 - WRAPPER_OVERHEAD
    assert ''.join(c[len(PRE_CODE_OPEN) : -len(PRE_CODE_CLOSE)] for c in interior) == payload
    assert _unwrap(chunks) == markup


def test_code_block_that_fits_is_sent_whole() -> None:
    block = f'{PRE_CODE_OPEN}print(1){PRE_CODE_CLOSE}'
    markup = f'intro\n\n{block}\n\nend'
    assert split_markup(markup, 4096) == ['intro\n\n', block, '\n\nend']


def test_code_block_at_start() -> None:
    block = f'{PRE_CODE_OPEN}x{PRE_CODE_CLOSE}'
    assert split_markup(block + 'tail', 4096) == [block, 'tail']


def test_code_block_beyond_reach_not_cut_early() -> None:
    """A marker past the first window does not force a cut yet."""
    markup = 'a' * 60 + f'{PRE_CODE_OPEN}x{PRE_CODE_CLOSE}'
    chunks = split_markup(markup, 50)
    assert chunks == ['a' * 50, 'a' * 10, f'{PRE_CODE_OPEN}x{PRE_CODE_CLOSE}']


def test_empty_code_block() -> None:
    block = f'{PRE_CODE_OPEN}{PRE_CODE_CLOSE}'
    assert split_markup(block, 4096) == [block]


def test_unterminated_code_block_runs_to_end() -> None:
    markup = f'text{PRE_CODE_OPEN}' + 'a' * 10
    chunks = split_markup(markup, 100)
    assert chunks == ['text', f'{PRE_CODE_OPEN}{"a" * 10}{PRE_CODE_CLOSE}']


def test_unterminated_large_code_block_terminates() -> None:
    markup = PRE_CODE_OPEN + 'a' * 500
    chunks = split_markup(markup, 50)
    _assert_chunks_within_limit(chunks, 50)
    assert all(c.endswith(PRE_CODE_CLOSE) for c in chunks)
    assert sum(len(c) - WRAPPER_OVERHEAD for c in chunks) == 500


def test_adjacent_code_blocks_keep_separator_chunk() -> None:
    first = f'{PRE_CODE_OPEN}a{PRE_CODE_CLOSE}'
    second = f'{PRE_CODE_OPEN}b{PRE_CODE_CLOSE}'
    assert split_markup(f'{first}\n\n{second}', 4096) == [first, '\n\n', second]


# ============================================================================
# Safe cut points
# ============================================================================


def test_cut_never_splits_entity() -> None:
    markup = 'a' * 24 + '&amp;' + 'b' * 30
    chunks = split_markup(markup, 26)

    assert chunks == ['a' * 24, '&amp;' + 'b' * 21, 'b' * 9]
    for chunk in chunks:
        assert chunk.count('&') == chunk.count('&amp;')


def test_cut_never_splits_tag_literal() -> None:
    markup = 'a' * 20 + '<a href="https://x.io">link</a>'
    chunks = split_markup(markup, 26)
    assert chunks == ['a' * 20, '<a href="https://x.io">lin', 'k</a>']


def test_code_slice_never_splits_entity() -> None:
    payload = 'x' + '&lt;' * 20
    markup = f'{PRE_CODE_OPEN}{payload}{PRE_CODE_CLOSE}'
    chunks = split_markup(markup, MIN_CHUNK_LENGTH + 4)

    _assert_chunks_within_limit(chunks, MIN_CHUNK_LENGTH + 4)
    for chunk in chunks:
        inner = chunk[len(PRE_CODE_OPEN) : -len(PRE_CODE_CLOSE)]
        assert inner.count('&') == inner.count('&lt;')
    assert _unwrap(chunks) == markup


def test_surrogate_pairs_counted_as_two_units() -> None:
    markup = '😀' * 30
    chunks = split_markup(markup, 26)

    assert [len(c) for c in chunks] == [13, 13, 4]
    _assert_chunks_within_limit(chunks, 26)
    assert ''.join(chunks) == markup


def test_code_slice_holds_one_astral_character() -> None:
    markup = f'{PRE_CODE_OPEN}{"😀" * 5}{PRE_CODE_CLOSE}'
    chunks = split_markup(markup, MIN_CHUNK_LENGTH)
    assert chunks == [f'{PRE_CODE_OPEN}😀{PRE_CODE_CLOSE}'] * 5


# ============================================================================
# Preconditions
# ============================================================================


@pytest.mark.parametrize('max_length', [0, 10, WRAPPER_OVERHEAD, MIN_CHUNK_LENGTH - 1])
def test_limit_below_wrapper_overhead_rejected(max_length: int) -> None:
    with pytest.raises(ChunkLimitError):
        split_markup('text', max_length)


def test_limit_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        split_markup('', 1)


def test_minimum_limit_accepted() -> None:
    assert split_markup('abc', MIN_CHUNK_LENGTH) == ['abc']


def test_limit_error_explains_minimum() -> None:
    with pytest.raises(ChunkLimitError, match='astral character'):
        split_markup('text', MIN_CHUNK_LENGTH - 1)
