from typing import BinaryIO, Optional, Tuple
from discserial.error_number import ErrorNumber
from discserial.ifilter import base_dir, get_file_size, join_path
from .constants import GDI_AUDIO_MODE, GDI_AUDIO_SECTOR_SIZE
from .tokenizer import get_token

import logging
logger = logging.getLogger(__name__)


def is_gdi_data_track(mode: int, sector_size: int) -> bool:
    return not (mode == GDI_AUDIO_MODE and sector_size == GDI_AUDIO_SECTOR_SIZE)


def _record_field(stream: BinaryIO, what: str) -> Tuple[ErrorNumber, Optional[str]]:
    error, token = get_token(stream)
    if error != ErrorNumber.NoError:
        return error, None
    if not token:
        logger.error(f"GDI record is missing its {what}")
        return ErrorNumber.InvalidArgument, None
    return ErrorNumber.NoError, token


def _record_int(stream: BinaryIO, what: str) -> Tuple[ErrorNumber, Optional[int]]:
    error, token = _record_field(stream, what)
    if error != ErrorNumber.NoError:
        return error, None
    try:
        return ErrorNumber.NoError, int(token)
    except ValueError:
        logger.error(f"GDI {what} '{token}' is not a number")
        return ErrorNumber.InvalidArgument, None


def parse_gdi_stream(stream: BinaryIO, gdi_dir: str, first: bool = False) -> Tuple[ErrorNumber, Optional[str]]:
    largest = 0
    track_path: Optional[str] = None

    # track count
    error, _ = get_token(stream)
    if error != ErrorNumber.NoError:
        return error, None

    while True:
        error, number = get_token(stream)
        if error != ErrorNumber.NoError:
            return error, None
        if number is None:
            break
        if not number:
            logger.error("GDI record has an empty track number")
            return ErrorNumber.InvalidArgument, None

        error, _ = _record_field(stream, "offset")
        if error != ErrorNumber.NoError:
            return error, None

        error, mode = _record_int(stream, "mode")
        if error != ErrorNumber.NoError:
            return error, None

        error, sector_size = _record_int(stream, "sector size")
        if error != ErrorNumber.NoError:
            return error, None

        error, name = _record_field(stream, "file name")
        if error != ErrorNumber.NoError:
            return error, None

        if is_gdi_data_track(mode, sector_size):
            path = join_path(gdi_dir, name)
            error, file_size = get_file_size(path)
            if error != ErrorNumber.NoError:
                logger.error(f"Cannot size GDI track {number} '{path}'")
                return error, None

            if file_size > largest:
                track_path = path
                largest = file_size
                if first:
                    return ErrorNumber.NoError, track_path

        error, _ = _record_field(stream, "disc offset")
        if error != ErrorNumber.NoError:
            return error, None

    if track_path is None:
        return ErrorNumber.NoData, None
    return ErrorNumber.NoError, track_path


def gdi_find_track(gdi_path: str, first: bool = False) -> Tuple[ErrorNumber, Optional[str]]:
    """
    Find the data track file of a GDI sheet: the largest one, or the first
    one when first is set. Audio tracks (mode 0, 2352 byte sectors) are never
    selected.
    """
    try:
        stream = open(gdi_path, 'rb')
    except OSError as ex:
        logger.error(f"Could not open GDI file '{gdi_path}': {ex.strerror}")
        return ErrorNumber.from_exception(ex), None

    logger.info(f"Parsing GDI file '{gdi_path}'...")

    with stream:
        return parse_gdi_stream(stream, base_dir(gdi_path), first)


def gdi_next_file(stream: BinaryIO, gdi_path: str) -> Optional[str]:
    """
    Read one track record from the current stream position and return the
    resolved path of its file. The leading track count is skipped when the
    stream is at its start.
    """
    if stream.tell() == 0:
        get_token(stream)

    # track number, offset, mode, sector size
    for _ in range(4):
        get_token(stream)

    error, name = get_token(stream)
    if error != ErrorNumber.NoError or not name:
        return None

    # disc offset
    get_token(stream)
    return join_path(base_dir(gdi_path), name)
