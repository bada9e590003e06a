import os
from discserial.ifilter import IFilter
import logging

logger = logging.getLogger(__name__)

SNIFF_LENGTH = 512


def _looks_like_text(data: bytes) -> bool:
    # Reject binary images that happen to carry no extension
    for byte in data:
        if byte < 0x20 and byte not in (0x09, 0x0A, 0x0D):
            return False
    return True


def _read_head(path: str) -> bytes:
    try:
        with open(path, 'rb') as f:
            head = f.read(SNIFF_LENGTH)
    except OSError as ex:
        logger.debug(f"Cannot read {path}: {ex}")
        return b''

    if head.startswith(b'\xef\xbb\xbf'):
        head = head[3:]
    return head


class SheetFilter(IFilter):
    """
    A sheet is recognised by its extension. Files without one are sniffed
    from their first 512 bytes.
    """

    def sniff(self, head: bytes) -> bool:
        return False

    def identify(self, path: str) -> bool:
        logger.debug(f"Attempting to identify file as {self.name}: {path}")
        if super().identify(path):
            return True

        _, ext = os.path.splitext(path)
        if ext or not os.path.isfile(path):
            return False

        head = _read_head(path)
        return _looks_like_text(head) and self.sniff(head)


class CueFilter(SheetFilter):
    EXTENSIONS = ('.cue',)

    @property
    def name(self) -> str:
        return "CUE sheet"

    def sniff(self, head: bytes) -> bool:
        return b'FILE' in head.upper() or b'TRACK' in head.upper()


class GdiFilter(SheetFilter):
    EXTENSIONS = ('.gdi',)

    @property
    def name(self) -> str:
        return "GDI sheet"

    def sniff(self, head: bytes) -> bool:
        # first token is the track count
        fields = head.split()
        return bool(fields) and fields[0].isdigit()


class ImageFilter(IFilter):
    EXTENSIONS = ('.iso', '.bin', '.img', '.gcm', '.wbfs')

    @property
    def name(self) -> str:
        return "Raw image"

    def identify(self, path: str) -> bool:
        if not os.path.isfile(path):
            return False
        _, ext = os.path.splitext(path)
        return ext.lower() in self.EXTENSIONS
