import re
from typing import BinaryIO, Optional, Tuple
from discserial.error_number import ErrorNumber
from discserial.ifilter import base_dir, get_file_size, join_path
from .constants import *
from .candidate import (
    NO_CANDIDATE, is_better, on_data_index, on_end_of_sheet,
    on_file_boundary, on_track_boundary
)
from .structs import CueCursor, ResolvedTrack
from .tokenizer import get_token

import logging
logger = logging.getLogger(__name__)

_msf = re.compile(REGEX_MSF)


def msf_to_frames(timestamp: str) -> Optional[int]:
    m = _msf.match(timestamp or "")
    if not m:
        return None
    return ((int(m.group('min')) * SECONDS_PER_MINUTE + int(m.group('sec'))) * FRAMES_PER_SECOND
            + int(m.group('frame')))


def cue_sector_size(mode: str) -> int:
    return CUE_SECTOR_SIZES.get(mode.upper(), SECTOR_SIZE_RAW)


def _required_token(stream: BinaryIO, what: str) -> Tuple[ErrorNumber, Optional[str]]:
    error, token = get_token(stream)
    if error != ErrorNumber.NoError:
        return error, None
    if token is None:
        logger.error(f"CUE sheet ended while reading {what}")
        return ErrorNumber.InvalidArgument, None
    return ErrorNumber.NoError, token


def _open_file(cursor: CueCursor, cue_dir: str, name: str) -> CueCursor:
    path = join_path(cue_dir, name)
    error, size = get_file_size(path)
    if error != ErrorNumber.NoError:
        logger.warning(f"Cannot size track file '{path}' ({error.name}), its tracks cannot be measured")
        size = None

    return CueCursor(path=path, file_size=size, track=cursor.track, is_data=cursor.is_data,
                     sector_size=cursor.sector_size)


def _index_offset(cursor: CueCursor, frames: int) -> int:
    # each span between INDEX points is stored with the sector size of the
    # track it belongs to
    span_sector_size = cursor.last_sector_size or cursor.sector_size or SECTOR_SIZE_RAW
    offset = cursor.last_offset + (frames - cursor.last_frames) * span_sector_size
    cursor.last_frames = frames
    cursor.last_offset = offset
    cursor.last_sector_size = cursor.sector_size or SECTOR_SIZE_RAW
    return offset


def parse_cue_stream(stream: BinaryIO, cue_dir: str, first: bool = False) -> Tuple[ErrorNumber, Optional[ResolvedTrack]]:
    """
    Walk FILE / TRACK / INDEX declarations and pick a data track.

    :param first: stop at the first data track instead of keeping the largest
    """
    state = NO_CANDIDATE
    best: Optional[ResolvedTrack] = None
    cursor = CueCursor()

    while True:
        error, token = get_token(stream)
        if error != ErrorNumber.NoError:
            return error, None
        if token is None:
            break

        keyword = token.upper()

        if keyword == CUE_FILE:
            state, finalized = on_file_boundary(state, cursor.file_size)
            if is_better(finalized, best):
                best = finalized
                if first:
                    return ErrorNumber.NoError, best

            error, name = _required_token(stream, "FILE name")
            if error != ErrorNumber.NoError:
                return error, None
            cursor = _open_file(cursor, cue_dir, name)

            # file type (BINARY, MOTOROLA, WAVE ...)
            error, _ = _required_token(stream, "FILE type")
            if error != ErrorNumber.NoError:
                return error, None

        elif keyword == CUE_TRACK:
            error, _ = _required_token(stream, "TRACK number")
            if error != ErrorNumber.NoError:
                return error, None
            error, mode = _required_token(stream, "TRACK mode")
            if error != ErrorNumber.NoError:
                return error, None

            cursor.is_data = mode.upper() != CUE_TRACK_TYPE_AUDIO
            cursor.sector_size = cue_sector_size(mode)
            cursor.track += 1

        elif keyword == CUE_INDEX:
            error, number = _required_token(stream, "INDEX number")
            if error != ErrorNumber.NoError:
                return error, None
            error, timestamp = _required_token(stream, "INDEX time stamp")
            if error != ErrorNumber.NoError:
                return error, None

            frames = msf_to_frames(timestamp)
            if frames is None or not number.isdigit():
                logger.error(f"Error parsing INDEX '{number} {timestamp}'")
                return ErrorNumber.InvalidArgument, None

            position = _index_offset(cursor, frames)

            state, finalized = on_track_boundary(state, cursor.track, position)
            if is_better(finalized, best):
                best = finalized
                if first:
                    return ErrorNumber.NoError, best

            if not cursor.is_data or int(number) < 1:
                continue

            state = on_data_index(state, cursor.track, position, cursor.path)

    state, finalized = on_end_of_sheet(state, cursor.file_size)
    if is_better(finalized, best):
        best = finalized

    if best is None:
        return ErrorNumber.NoData, None
    return ErrorNumber.NoError, best


def cue_find_track(cue_path: str, first: bool = False) -> Tuple[ErrorNumber, Optional[ResolvedTrack]]:
    """
    Locate the data track described by a CUE sheet.

    :return: (NoError, ResolvedTrack) with the offset and size of the track
             inside its file, (NoData, None) when the sheet has no measurable
             data track, or the I/O / format error
    """
    try:
        stream = open(cue_path, 'rb')
    except OSError as ex:
        logger.error(f"Could not open CUE file '{cue_path}': {ex.strerror}")
        return ErrorNumber.from_exception(ex), None

    logger.info(f"Parsing CUE file '{cue_path}'...")

    with stream:
        error, track = parse_cue_stream(stream, base_dir(cue_path), first)

    if track:
        logger.debug(f"Data track '{track.path}' offset {track.offset} size {track.size}")
    return error, track


def cue_next_file(stream: BinaryIO, cue_path: str) -> Optional[str]:
    """Advance the stream to the next FILE declaration and return its resolved path."""
    cue_dir = base_dir(cue_path)

    while True:
        error, token = get_token(stream)
        if error != ErrorNumber.NoError or token is None:
            return None

        if token.upper() == CUE_FILE:
            error, name = get_token(stream)
            if error != ErrorNumber.NoError or name is None:
                return None
            return join_path(cue_dir, name)
