"""Streaming extraction of the YAML front-matter block at the start of a file.

A front-matter block looks like::

    ---
    key1: value1
    key2: value2
    ---
    <file body>

Only the bytes up to the closing delimiter are consumed; the body is never read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Optional

import yaml

from veisku.constants import PREAMBLE_LOOKAHEAD_BYTES, READ_CHUNK_BYTES
from veisku.errors import MetadataEncodingError, MetadataSyntaxError

logger = logging.getLogger(__name__)

# (opening, closing) pairs. CRLF must be tried before CR.
DELIMITERS: tuple[tuple[bytes, bytes], ...] = (
    (b"---\r\n", b"\r\n---\r\n"),
    (b"---\n", b"\n---\n"),
    (b"---\r", b"\r---\r"),
)


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as plain strings."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read ``size`` bytes, or fewer only when the stream ends first."""
    data = b""
    while len(data) < size:
        chunk = stream.read(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def find_preamble(stream: BinaryIO, chunk_size: int = READ_CHUNK_BYTES) -> Optional[bytes]:
    """Return the raw bytes between the front-matter delimiters.

    Args:
        stream: Binary stream positioned at the start of the file.
        chunk_size: Number of bytes requested per read once a block has opened.

    Returns:
        The bytes strictly between the opening and closing delimiters, or ``None``
        when the stream does not start with a block or ends before the block
        is closed.

    Raises:
        OSError: If reading the stream fails.
    """
    head = _read_exact(stream, PREAMBLE_LOOKAHEAD_BYTES)
    if len(head) < PREAMBLE_LOOKAHEAD_BYTES:
        return None

    for opening, closing in DELIMITERS:
        if head.startswith(opening):
            break
    else:
        return None

    # The lookahead may already hold the first bytes of the block.
    buffer = bytearray(head[len(opening):])

    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            logger.warning("Encountered EOF while reading the preamble")
            return None

        search_start = max(len(buffer) - (len(closing) - 1), 0)
        buffer.extend(chunk)

        index = buffer.find(closing, search_start)
        if index != -1:
            return bytes(buffer[:index])


def extract_metadata(
    stream: BinaryIO,
    chunk_size: int = READ_CHUNK_BYTES,
    path: Optional[Path] = None,
) -> Optional[Any]:
    """Parse the front-matter block of ``stream`` as YAML.

    Args:
        stream: Binary stream positioned at the start of the file.
        chunk_size: Number of bytes requested per read.
        path: Document path used to annotate errors.

    Returns:
        The parsed YAML value, or ``None`` when no block is present. A block
        holding no YAML value at all yields an empty mapping.

    Raises:
        OSError: If reading the stream fails.
        MetadataEncodingError: If the block is not valid UTF-8.
        MetadataSyntaxError: If the block is not valid YAML.
    """
    raw = find_preamble(stream, chunk_size)
    if raw is None:
        return None

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MetadataEncodingError(
            f"Failed to decode the preamble of {path or 'stream'} as UTF-8: {exc}", path
        ) from exc

    try:
        data = yaml.load(text, Loader=FrontMatterLoader)
    except yaml.YAMLError as exc:
        raise MetadataSyntaxError(
            f"Failed to parse the preamble of {path or 'stream'} as YAML: {exc}", path
        ) from exc
    return {} if data is None else data
