import os
import re
from typing import BinaryIO, Optional

import logging
logger = logging.getLogger(__name__)

_space_runs = re.compile(r' {2,}')
_whitespace = re.compile(r'\s')


def read_at(stream: BinaryIO, offset: int, length: int) -> Optional[bytes]:
    """Read up to length bytes at offset; None when nothing could be read."""
    try:
        stream.seek(offset, os.SEEK_SET)
        data = stream.read(length)
    except OSError as ex:
        logger.debug(f"Read of {length} bytes at {offset:#x} failed: {ex}")
        return None
    return data or None


def stream_size(stream: BinaryIO) -> Optional[int]:
    try:
        return stream.seek(0, os.SEEK_END)
    except OSError as ex:
        logger.debug(f"Cannot seek to end of stream: {ex}")
        return None


def header_text(data: bytes) -> str:
    """Header fields are NUL terminated ASCII."""
    return data.split(b'\x00', 1)[0].decode('ascii', errors='replace')


def remove_spaces(text: str) -> str:
    return _whitespace.sub('', text)


def trim_spaces(text: str) -> str:
    return text.strip(' \t')


def collapse_spaces(text: str) -> str:
    return _space_runs.sub(' ', text)


def spaces_to(text: str, replacement: str) -> str:
    return _whitespace.sub(replacement, text)
