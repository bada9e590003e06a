import errno

import pytest

from discserial.error_number import ErrorNumber
from discserial.sheet.cue import cue_find_track
from discserial.sheet.gdi import gdi_find_track


@pytest.mark.parametrize('err, expected', [
    (errno.ENOENT, ErrorNumber.NoSuchFile),
    (errno.EACCES, ErrorNumber.AccessDenied),
    (errno.ENAMETOOLONG, ErrorNumber.NameTooLong),
    (errno.ELOOP, ErrorNumber.TooManySymbolicLinks),
    (errno.ENXIO, ErrorNumber.NoSuchDevice),
    (errno.ENODEV, ErrorNumber.NoDevice),
    (errno.ESPIPE, ErrorNumber.IllegalSeek),
    (errno.EFBIG, ErrorNumber.FileTooLarge),
    (errno.ENOSPC, ErrorNumber.NoSpaceLeft),
])
def test_from_errno(err, expected):
    assert ErrorNumber.from_errno(err) == expected
    assert ErrorNumber.from_exception(OSError(err, 'failed')) == expected


def test_unmapped_errno():
    assert ErrorNumber.from_errno(0) == ErrorNumber.InOutError
    assert ErrorNumber.from_errno(None) == ErrorNumber.InOutError
    assert ErrorNumber.from_errno(99999) == ErrorNumber.InOutError


def test_sheet_name_too_long(tmp_path):
    name = 'a' * 300
    assert cue_find_track(str(tmp_path / f'{name}.cue')) == (ErrorNumber.NameTooLong, None)
    assert gdi_find_track(str(tmp_path / f'{name}.gdi')) == (ErrorNumber.NameTooLong, None)
