import io
import os
from typing import BinaryIO, Optional


class TrackStream(io.RawIOBase):
    """
    Read-only window over [start_offset, start_offset + size) of another
    stream, so readers that seek to absolute header offsets can work on a
    track stored inside a larger image file.
    """

    def __init__(self, stream: BinaryIO, start_offset: int = 0, size: Optional[int] = None):
        super().__init__()
        self._stream = stream
        self._start = start_offset
        if size is None:
            size = max(stream.seek(0, os.SEEK_END) - start_offset, 0)
        self._size = size
        self._pos = 0

    @property
    def start_offset(self) -> int:
        return self._start

    @property
    def size(self) -> int:
        return self._size

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if whence == os.SEEK_SET:
            pos = offset
        elif whence == os.SEEK_CUR:
            pos = self._pos + offset
        elif whence == os.SEEK_END:
            pos = self._size + offset
        else:
            raise ValueError(f"invalid whence ({whence})")
        if pos < 0:
            raise OSError(22, "negative seek position")
        self._pos = pos
        return self._pos

    def tell(self) -> int:
        return self._pos

    def readinto(self, buffer) -> int:
        remaining = self._size - self._pos
        if remaining <= 0:
            return 0
        length = min(len(buffer), remaining)
        self._stream.seek(self._start + self._pos, os.SEEK_SET)
        data = self._stream.read(length)
        buffer[:len(data)] = data
        self._pos += len(data)
        return len(data)

    def close(self):
        if not self.closed:
            self._stream.close()
        super().close()
