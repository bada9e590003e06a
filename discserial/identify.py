import os
from dataclasses import dataclass
from typing import List, Optional, Tuple
from discserial.error_number import ErrorNumber
from discserial.ifilter import get_file_size
from discserial.magic import detect_system
from discserial.plugin_register import PluginRegister
from discserial.serial.extractors import extract_serial
from discserial.sheet.cue import cue_find_track, cue_next_file
from discserial.sheet.gdi import gdi_find_track, gdi_next_file
from discserial.sheet.structs import ResolvedTrack
from discserial.sheet_filter import CueFilter, GdiFilter
from discserial.track_stream import TrackStream

import logging
logger = logging.getLogger(__name__)


@dataclass
class DiscIdentity:
    path: str
    track_path: str = ""
    offset: int = 0
    size: int = 0
    system: Optional[str] = None
    serial: Optional[str] = None
    extractor: Optional[str] = None

    @property
    def name(self) -> str:
        return os.path.splitext(os.path.basename(self.path))[0]


def _whole_file(path: str) -> Tuple[ErrorNumber, Optional[ResolvedTrack]]:
    error, size = get_file_size(path)
    if error != ErrorNumber.NoError:
        return error, None
    return ErrorNumber.NoError, ResolvedTrack(offset=0, size=size, path=path)


def resolve_data_track(path: str, first: bool = False) -> Tuple[ErrorNumber, Optional[ResolvedTrack]]:
    """
    Sheets are resolved to their data track, anything else is read whole.
    """
    image_filter = PluginRegister.get_instance().get_filter(path)

    if isinstance(image_filter, CueFilter):
        return cue_find_track(path, first)

    if isinstance(image_filter, GdiFilter):
        error, track_path = gdi_find_track(path, first)
        if error != ErrorNumber.NoError:
            return error, None
        return _whole_file(track_path)

    return _whole_file(path)


def identify_image(path: str, first: bool = False) -> Tuple[ErrorNumber, Optional[DiscIdentity]]:
    """
    Find the data track of an image, detect its system and read its serial.

    A missing serial is not an error: the identity is returned with serial
    set to None.
    """
    error, track = resolve_data_track(path, first)
    if error != ErrorNumber.NoError:
        logger.warning(f"No data track for '{path}': {error.name}")
        return error, None

    try:
        track_file = open(track.path, 'rb')
    except OSError as ex:
        logger.error(f"Could not open track file '{track.path}': {ex.strerror}")
        return ErrorNumber.from_exception(ex), None

    with TrackStream(track_file, track.offset, track.size) as stream:
        system = detect_system(stream)
        serial, extractor = extract_serial(stream, system)

    identity = DiscIdentity(path=path, track_path=track.path, offset=track.offset, size=track.size,
                            system=system, serial=serial, extractor=extractor)
    if serial:
        logger.info(f"{identity.name}: {system or 'unknown system'} serial {serial}")
    else:
        logger.info(f"{identity.name}: no serial found")
    return ErrorNumber.NoError, identity


def list_sheet_files(path: str) -> List[str]:
    """Files referenced by a CUE or GDI sheet, in sheet order."""
    image_filter = PluginRegister.get_instance().get_filter(path)

    if isinstance(image_filter, CueFilter):
        next_file = cue_next_file
    elif isinstance(image_filter, GdiFilter):
        next_file = gdi_next_file
    else:
        return [path]

    files = []
    with image_filter:
        stream = image_filter.get_data_fork_stream()
        while True:
            track_path = next_file(stream, path)
            if track_path is None:
                break
            files.append(track_path)
    return files
