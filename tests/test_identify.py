import io
import os

from discserial.error_number import ErrorNumber
from discserial.identify import identify_image, list_sheet_files, resolve_data_track
from discserial.plugin_register import PluginRegister
from discserial.serial.extractors import EXTRACTORS, extract_serial, get_extractor
from discserial.sheet_filter import CueFilter, GdiFilter
from discserial.track_stream import TrackStream
from disc_images import SECTOR_RAW, build_ps1_image, write_sized


def gc_bytes():
    return b'GM4E01' + bytes(0x16) + b'\xc2\x33\x9f\x3d' + bytes(0x400)


def test_track_stream_window():
    stream = TrackStream(io.BytesIO(b'0123456789'), 2, 5)
    assert stream.read() == b'23456'
    assert stream.seek(0, os.SEEK_END) == 5
    stream.seek(1)
    assert stream.read(10) == b'3456'
    assert stream.read(1) == b''
    stream.seek(100)
    assert stream.read(4) == b''


def test_track_stream_defaults_to_rest_of_file():
    stream = TrackStream(io.BytesIO(b'0123456789'), 7)
    assert stream.size == 3
    assert stream.read() == b'789'


def test_extractor_registry():
    assert [e.system for e in EXTRACTORS] == ['ps1', 'psp', 'gc', 'scd', 'sat', 'dc']
    assert get_extractor('gc').system == 'gc'
    assert get_extractor('wii') is None


def test_extract_serial_by_system():
    assert extract_serial(io.BytesIO(gc_bytes()), 'gc') == ('DL-DOL-GM4E-USA', 'gc')


def test_extract_serial_falls_back_to_ascii():
    stream = io.BytesIO(b'RSPE01' + bytes(0x12) + b'\x5d\x1c\x9e\xa3' + bytes(64))
    assert extract_serial(stream, 'wii') == ('RSPE01', 'ascii')
    assert extract_serial(io.BytesIO(bytes(64)), 'wii') == (None, None)
    assert extract_serial(stream, 'wii', fallback=False) == (None, None)


def test_extract_serial_without_system_reads_ps1_directory():
    stream = io.BytesIO(build_ps1_image(frame_size=2352, skip=24))
    assert extract_serial(stream) == ('SLUS-01234', 'ps1')


def test_extract_serial_without_system_skips_header_readers():
    stream = io.BytesIO(b'WBFS' + bytes(64) + b'RSPE01\x00')
    assert extract_serial(stream) == ('RSPE01', 'ascii')
    # a GameCube style game code with no GameCube signature
    assert extract_serial(io.BytesIO(b'GM4E01' + bytes(64)), fallback=False) == (None, None)


def test_identify_wbfs_image(tmp_path):
    image = tmp_path / 'Game.wbfs'
    image.write_bytes(b'WBFS\x00\x00\x00\x10\x09' + bytes(0x1f7) + b'RSPE01\x00' + bytes(64))

    error, identity = identify_image(str(image))
    assert error == ErrorNumber.NoError
    assert identity.system is None
    assert identity.serial == 'RSPE01'
    assert identity.extractor == 'ascii'


def test_identify_raw_image(tmp_path):
    iso = tmp_path / 'Mario Kart.iso'
    iso.write_bytes(gc_bytes())

    error, identity = identify_image(str(iso))
    assert error == ErrorNumber.NoError
    assert identity.name == 'Mario Kart'
    assert identity.system == 'gc'
    assert identity.serial == 'DL-DOL-GM4E-USA'
    assert identity.track_path == str(iso)
    assert identity.size == len(gc_bytes())


def test_identify_cue_data_track(tmp_path):
    data_track = build_ps1_image(frame_size=SECTOR_RAW, skip=24)
    (tmp_path / 'game.bin').write_bytes(bytes(SECTOR_RAW * 10) + data_track)
    cue = tmp_path / 'game.cue'
    cue.write_text('FILE "game.bin" BINARY\n  TRACK 01 AUDIO\n    INDEX 01 00:00:00\n'
                   '  TRACK 02 MODE2/2352\n    INDEX 01 00:00:10\n')

    error, identity = identify_image(str(cue))
    assert error == ErrorNumber.NoError
    assert identity.track_path == str(tmp_path / 'game.bin')
    assert identity.offset == SECTOR_RAW * 10
    assert identity.size == len(data_track)
    assert identity.serial == 'SLUS-01234'
    assert identity.extractor == 'ps1'


def test_identify_gdi(tmp_path):
    write_sized(tmp_path / 'track01.bin', SECTOR_RAW * 10)
    write_sized(tmp_path / 'track02.raw', SECTOR_RAW * 100)
    header = b'SEGA SEGAKATANA ' + bytes(0x30) + b'T-8101N   '
    (tmp_path / 'track03.bin').write_bytes(header + bytes(SECTOR_RAW * 20))
    gdi = tmp_path / 'disc.gdi'
    gdi.write_text('3\n1 0 4 2352 track01.bin 0\n2 450 0 2352 track02.raw 0\n3 45000 4 2352 track03.bin 0\n')

    error, identity = identify_image(str(gdi))
    assert error == ErrorNumber.NoError
    assert identity.track_path == str(tmp_path / 'track03.bin')
    assert identity.system == 'dc'
    assert identity.serial == 'T-8101N'


def test_identify_without_serial(tmp_path):
    image = tmp_path / 'blank.iso'
    image.write_bytes(bytes(4096))

    error, identity = identify_image(str(image))
    assert error == ErrorNumber.NoError
    assert identity.serial is None
    assert identity.system is None


def test_identify_missing(tmp_path):
    assert identify_image(str(tmp_path / 'missing.iso')) == (ErrorNumber.NoSuchFile, None)


def test_resolve_unparseable_cue(tmp_path):
    cue = tmp_path / 'bad.cue'
    cue.write_text('FILE "x.bin" BINARY\n TRACK 01 MODE1/2352\n INDEX 01 aa:bb:cc\n')
    assert resolve_data_track(str(cue)) == (ErrorNumber.InvalidArgument, None)


def test_list_sheet_files(tmp_path):
    cue = tmp_path / 'game.cue'
    cue.write_text('FILE "a.bin" BINARY\n TRACK 01 MODE1/2352\n INDEX 01 00:00:00\n'
                   'FILE "b.bin" BINARY\n TRACK 02 AUDIO\n INDEX 01 00:00:00\n')
    gdi = tmp_path / 'disc.gdi'
    gdi.write_text('2\n1 0 4 2352 track01.bin 0\n2 450 0 2352 track02.raw 0\n')
    iso = tmp_path / 'game.iso'
    iso.write_bytes(bytes(16))

    assert list_sheet_files(str(cue)) == [str(tmp_path / 'a.bin'), str(tmp_path / 'b.bin')]
    assert list_sheet_files(str(gdi)) == [str(tmp_path / 'track01.bin'), str(tmp_path / 'track02.raw')]
    assert list_sheet_files(str(iso)) == [str(iso)]


def test_identify_cue_with_long_preamble(tmp_path):
    (tmp_path / 'game.bin').write_bytes(build_ps1_image(frame_size=SECTOR_RAW, skip=24))
    preamble = ''.join(f'REM COMMENT "ripped with a rather long tool name, pass {i:02d}"\n' for i in range(15))
    assert len(preamble) > 512
    cue = tmp_path / 'game.cue'
    cue.write_text(preamble + 'FILE "game.bin" BINARY\n  TRACK 01 MODE2/2352\n    INDEX 01 00:00:00\n')

    assert isinstance(PluginRegister.get_instance().get_filter(str(cue)), CueFilter)
    error, identity = identify_image(str(cue))
    assert error == ErrorNumber.NoError
    assert identity.track_path == str(tmp_path / 'game.bin')
    assert identity.serial == 'SLUS-01234'


def test_binary_sheet_is_not_read_as_image(tmp_path):
    cue = tmp_path / 'broken.cue'
    cue.write_bytes(b'GM4E01' + bytes(4096))
    gdi = tmp_path / 'broken.gdi'
    gdi.write_bytes(b'\x00\x01\x02' + bytes(64))

    assert identify_image(str(cue)) == (ErrorNumber.NoData, None)
    assert isinstance(PluginRegister.get_instance().get_filter(str(gdi)), GdiFilter)
    assert identify_image(str(gdi))[1] is None


def test_sheet_without_extension_is_sniffed(tmp_path):
    sheet = tmp_path / 'sheet'
    sheet.write_text('FILE "a.bin" BINARY\n TRACK 01 MODE1/2352\n INDEX 01 00:00:00\n')
    blob = tmp_path / 'blob'
    blob.write_bytes(b'\x00FILE' + bytes(16))

    assert isinstance(PluginRegister.get_instance().get_filter(str(sheet)), CueFilter)
    assert PluginRegister.get_instance().get_filter(str(blob)) is None
    assert list_sheet_files(str(sheet)) == [str(tmp_path / 'a.bin')]


def test_cso_is_not_a_raw_image(tmp_path):
    cso = tmp_path / 'game.cso'
    cso.write_bytes(bytes(64))
    assert PluginRegister.get_instance().get_filter(str(cso)) is None
