import os
from typing import Optional, BinaryIO, Tuple
from discserial.error_number import ErrorNumber

import logging
logger = logging.getLogger(__name__)


def get_file_size(path: str) -> Tuple[ErrorNumber, int]:
    """
    Size in bytes of the file at path, or -1 alongside the error that
    prevented opening it.
    """
    try:
        with open(path, 'rb') as f:
            f.seek(0, os.SEEK_END)
            return ErrorNumber.NoError, f.tell()
    except OSError as ex:
        logger.debug(f"Could not size '{path}': {ex}")
        return ErrorNumber.from_exception(ex), -1


def base_dir(path: str) -> str:
    return os.path.dirname(path)


def join_path(directory: str, name: str) -> str:
    # sheets written on Windows reference files with backslashes
    if os.sep != '\\':
        name = name.replace('\\', os.sep)
    return os.path.join(directory, name)


class IFilter:
    EXTENSIONS: Tuple[str, ...] = ()

    def __init__(self, path: str):
        self._path = path
        self._stream: Optional[BinaryIO] = None

    @property
    def name(self) -> str:
        return "Raw image"

    @property
    def base_path(self) -> str:
        return self._path

    @property
    def filename(self) -> str:
        return os.path.basename(self._path)

    @property
    def length(self) -> int:
        return os.path.getsize(self._path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def parent_folder(self) -> str:
        return base_dir(self._path)

    def get_data_fork_stream(self) -> BinaryIO:
        if not self._stream or self._stream.closed:
            self._stream = open(self._path, 'rb')
        return self._stream

    def identify(self, path: str) -> bool:
        _, ext = os.path.splitext(path)
        return os.path.isfile(path) and ext.lower() in self.EXTENSIONS

    def open(self, path: Optional[str] = None) -> ErrorNumber:
        path = path or self._path
        if not self.identify(path):
            return ErrorNumber.InvalidArgument

        try:
            self._stream = open(path, 'rb')
            self._path = path
            return ErrorNumber.NoError
        except OSError as ex:
            logger.error(f"Could not open '{path}': {ex}")
            return ErrorNumber.from_exception(ex)

    def close(self):
        if self._stream:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> 'IFilter':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
