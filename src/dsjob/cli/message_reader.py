"""Reading a log message body from standard input.

The message is collected up to :data:`MAX_MESSAGE_LENGTH` characters.
Only newlines and printable characters are kept.  Input past the cap is
still read to end of input but discarded, so the length bound holds no
matter how much is piped in.

When the stream exposes its byte buffer (as ``sys.stdin`` does) the
bytes are decoded here with undecodable sequences replaced, so text in
an unexpected encoding never aborts the read.
"""

from __future__ import annotations

import codecs
import sys
from collections.abc import Iterator
from typing import TextIO

MAX_MESSAGE_LENGTH: int = 4096

_CHUNK_SIZE: int = 1024

# Ctrl-D typed at a Windows console arrives as a character, not as EOF.
_END_OF_INPUT: str | None = "\x04" if sys.platform == "win32" else None


def _keep(char: str) -> bool:
    return char == "\n" or char.isprintable()


def _text_chunks(stream: TextIO, encoding: str | None) -> Iterator[str]:
    raw = getattr(stream, "buffer", None)
    if raw is None:
        while True:
            chunk = stream.read(_CHUNK_SIZE)
            if not chunk:
                return
            yield chunk
    codec = encoding or getattr(stream, "encoding", None) or "utf-8"
    decoder = codecs.getincrementaldecoder(codec)(errors="replace")
    while True:
        data = raw.read(_CHUNK_SIZE)
        text = decoder.decode(data, final=not data)
        if text:
            yield text
        if not data:
            return


def read_message(
    stream: TextIO,
    *,
    limit: int = MAX_MESSAGE_LENGTH,
    encoding: str | None = None,
) -> str:
    """Read a message from *stream* until end of input.

    Parameters
    ----------
    stream:
        Text stream to drain, normally ``sys.stdin``.
    limit:
        Maximum number of characters kept.
    encoding:
        Codec for the stream's byte buffer.  Defaults to the stream's
        own encoding.  Ignored for streams without a byte buffer.
    """
    kept: list[str] = []
    size = 0
    for chunk in _text_chunks(stream, encoding):
        terminated = _END_OF_INPUT is not None and _END_OF_INPUT in chunk
        if terminated:
            chunk = chunk.partition(_END_OF_INPUT)[0]
        if size < limit:
            accepted = [char for char in chunk if _keep(char)][: limit - size]
            kept.extend(accepted)
            size += len(accepted)
        if terminated:
            break
    return "".join(kept)
