import errno
from enum import IntEnum


class ErrorNumber(IntEnum):
    # Values mirror the negated POSIX errno so an OSError maps straight across
    NoError = 0
    NotPermitted = -errno.EPERM
    NoSuchFile = -errno.ENOENT
    InterruptedIO = -errno.EINTR
    InOutError = -errno.EIO
    NoSuchDevice = -errno.ENXIO
    BadFileNumber = -errno.EBADF
    TryAgain = -errno.EAGAIN
    OutOfMemory = -errno.ENOMEM
    AccessDenied = -errno.EACCES
    Busy = -errno.EBUSY
    NoDevice = -errno.ENODEV
    NotDirectory = -errno.ENOTDIR
    IsDirectory = -errno.EISDIR
    InvalidArgument = -errno.EINVAL
    TooManyOpenFilesInSystem = -errno.ENFILE
    TooManyOpenFiles = -errno.EMFILE
    FileTooLarge = -errno.EFBIG
    NoSpaceLeft = -errno.ENOSPC
    IllegalSeek = -errno.ESPIPE
    ReadOnlyFileSystem = -errno.EROFS
    OutOfRange = -errno.ERANGE
    NameTooLong = -errno.ENAMETOOLONG
    TooManySymbolicLinks = -errno.ELOOP
    NoData = -errno.ENODATA
    NotSupported = -errno.EOPNOTSUPP
    CannotOpenFile = -1000

    @classmethod
    def from_errno(cls, err: int) -> 'ErrorNumber':
        if not err:
            return cls.InOutError
        try:
            return cls(-abs(err))
        except ValueError:
            return cls.InOutError

    @classmethod
    def from_exception(cls, ex: OSError) -> 'ErrorNumber':
        return cls.from_errno(ex.errno)
