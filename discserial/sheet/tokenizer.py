import os
from typing import BinaryIO, Optional, Tuple
from discserial.error_number import ErrorNumber
from .constants import MAX_TOKEN_LEN, WHITESPACE, QUOTE

import logging
logger = logging.getLogger(__name__)


def _read_byte(stream: BinaryIO) -> bytes:
    while True:
        try:
            return stream.read(1)
        except (InterruptedError, BlockingIOError):
            continue


def get_token(stream: BinaryIO, max_len: int = MAX_TOKEN_LEN) -> Tuple[ErrorNumber, Optional[str]]:
    """
    Pull the next whitespace or quote delimited token from a sheet stream.

    Leading whitespace is skipped. A double quote opening a token keeps
    whitespace literally until the closing quote. Tokens longer than max_len
    are cut at max_len and the remainder is returned by the next call.

    :return: (NoError, token), (NoError, None) at end of stream, or the
             mapped error and None when the read fails
    """
    token = bytearray()
    in_string = False

    while True:
        try:
            c = _read_byte(stream)
        except OSError as ex:
            logger.debug(f"Token read failed: {ex}")
            return ErrorNumber.from_exception(ex), None

        if not c:
            if token or in_string:
                return ErrorNumber.NoError, os.fsdecode(bytes(token))
            return ErrorNumber.NoError, None

        if c in WHITESPACE and not in_string:
            if not token:
                continue
            return ErrorNumber.NoError, os.fsdecode(bytes(token))

        if c == QUOTE:
            if not token and not in_string:
                in_string = True
                continue
            return ErrorNumber.NoError, os.fsdecode(bytes(token))

        token += c
        if len(token) == max_len:
            return ErrorNumber.NoError, os.fsdecode(bytes(token))
