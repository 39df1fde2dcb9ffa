"""Magic-number checks for the file formats that can be recognised in a buffer."""

from __future__ import annotations

from collections.abc import Callable

SignatureCheck = Callable[[bytes], "str | None"]

_DIB_HEADER_SIZES = (12, 40, 108, 124)
_DIB_BIT_COUNTS = (1, 4, 8, 24, 32)


def _u32le(data: bytes, offset: int) -> int:
    return int.from_bytes(bytes(data[offset : offset + 4]), "little")


def is_dib(data: bytes) -> bool:
    """True when `data` starts with a device-independent bitmap header."""
    if len(data) > 15 and data[0] in _DIB_HEADER_SIZES:
        return (
            data[12] == 1
            and data[13] == 0
            and data[14] in _DIB_BIT_COUNTS
            and data[15] == 0
        )
    return False


def _bmp(data: bytes) -> str | None:
    if len(data) > 36 and data[:2] == b"BM" and data[6:10] == b"\x00\x00\x00\x00":
        # The pixel data offset can be neither smaller than the headers nor huge.
        pic_offset = _u32le(data, 10)
        if 0x36 <= pic_offset <= 0xFFFF and is_dib(data[14:]):
            return "bmp"
    return None


def _png(data: bytes) -> str | None:
    if len(data) > 16 and data[:8] == b"\x89PNG\r\n\x1a\n":
        # The IHDR chunk always follows and is always 13 bytes long.
        if data[8:16] == b"\x00\x00\x00\x0dIHDR":
            return "png"
    return None


def _ico(data: bytes) -> str | None:
    if (
        len(data) > 54
        and data[0] == 0
        and data[1] == 0
        and data[2] in (1, 2)
        and data[3] == 0
        and data[5] == 0
        and data[9] == 0
    ):
        image_offset = _u32le(data, 18)
        if 22 <= image_offset < len(data):
            image = data[image_offset:]
            if _png(image) is not None or is_dib(image):
                return "ico"
    return None


def _gif(data: bytes) -> str | None:
    if len(data) > 11 and data[:6] == b"GIF89a":
        # Skip the global color table; an extension block starting with '!' follows.
        offset = (1 << ((data[10] & 0x07) + 1)) * 3 + 13
        if len(data) > offset and data[offset] == 0x21:
            return "gif"
    return None


def _jpeg(data: bytes) -> str | None:
    if len(data) > 12 and data[:3] == b"\xff\xd8\xff" and data[3] in (0xE0, 0xE1):
        return "jpeg"
    return None


_ZIP_BLOCKS = {(3, 4), (6, 8), (1, 2), (6, 6), (6, 7), (5, 6), (5, 5)}


def _zip(data: bytes) -> str | None:
    if len(data) > 8 and data[:2] == b"PK" and (data[2], data[3]) in _ZIP_BLOCKS:
        return "zip"
    return None


def _rar(data: bytes) -> str | None:
    if len(data) > 8 and data[:6] == b"Rar!\x1a\x07" and data[6] in (0, 1):
        return "rar"
    return None


def _sevenzip(data: bytes) -> str | None:
    if len(data) > 8 and data[:6] == b"7z\xbc\xaf\x27\x1c":
        return "7zip"
    return None


def _xz(data: bytes) -> str | None:
    if len(data) > 8 and data[:7] == b"\xfd7zXZ\x00\x00":
        return "xz"
    return None


def _bzip2(data: bytes) -> str | None:
    if (
        len(data) > 12
        and data[:3] == b"BZh"
        and 0x31 <= data[3] <= 0x39
        and data[4:10] == b"1AY&SY"
    ):
        return "bzip2"
    return None


def _gzip(data: bytes) -> str | None:
    if (
        len(data) > 12
        and data[:3] == b"\x1f\x8b\x08"
        and data[3] <= 0x1F
        and data[8] in (0, 2, 4)
        and (data[9] <= 13 or data[9] == 0xFF)
    ):
        return "gzip"
    return None


def _lzip(data: bytes) -> str | None:
    if len(data) > 12 and data[:5] == b"LZIP\x01":
        return "lzip"
    return None


def _lzo(data: bytes) -> str | None:
    if len(data) > 12 and data[:9] == b"\x89LZO\x00\r\n\x1a\n":
        return "lzo"
    return None


def _cab(data: bytes) -> str | None:
    if (
        len(data) > 26
        and data[:3] == b"MSC"
        and data[3] <= 0x46
        and data[4:8] == b"\x00\x00\x00\x00"
        and data[24] == 0x03
        and data[25] == 0x01
    ):
        return "cab"
    return None


def _zpaq(data: bytes) -> str | None:
    if len(data) > 13 and data[:13] == b"7kSt\xa0\x31\x83\xd3\x8c\xb2\x28\xb0\xd3":
        return "zpaq"
    return None


def _zpaq_blk(data: bytes) -> str | None:
    if len(data) > 5 and data[:3] == b"zPQ" and data[3] in (1, 2) and data[4] == 1:
        return "zpaq_blk"
    return None


def _xar(data: bytes) -> str | None:
    if (
        len(data) > 28
        and data[:5] == b"xar!\x00"
        and data[5] >= 0x1C
        and data[6] == 0
        and data[7] == 1
        and data[24:27] == b"\x00\x00\x00"
        and data[27] <= 3
    ):
        return "xar"
    return None


def _lz4(data: bytes) -> str | None:
    if len(data) > 12 and data[:4] == b"\x04\x22\x4d\x18" and data[4] & 0b11000010 == 0b01000000:
        return "lz4"
    return None


def _nsis(data: bytes) -> str | None:
    if len(data) > 16 and data[:16] == b"\xef\xbe\xad\xdeNullsoftInst":
        return "nsis"
    return None


def _java(data: bytes) -> str | None:
    if len(data) > 16 and data[:4] == b"\xca\xfe\xba\xbe":
        # Class files carry a major version here; universal binaries an arch count.
        return "java" if data[6] == 0 and data[7] >= 0x2D else "fat"
    return None


def _dmg(data: bytes) -> str | None:
    if len(data) > 12 and data[:12] == b"koly\x00\x00\x00\x04\x00\x00\x02\x00":
        return "dmg"
    return None


def _deb(data: bytes) -> str | None:
    if (
        len(data) > 0x26
        and data[:21] == b"!<arch>\ndebian-binary"
        and data[66:68] == b"\x60\x0a"
    ):
        return "deb"
    return None


def _rpm(data: bytes) -> str | None:
    if (
        len(data) > 0x70
        and data[:6] == b"\xed\xab\xee\xdb\x03\x00"
        and data[0x60:0x63] == b"\x8e\xad\xe8"
    ):
        return "rpm"
    return None


def _mzpe(data: bytes) -> str | None:
    if len(data) > 0x40 and data[:2] == b"MZ":
        # The dword at 0x3C points to the PE header.
        pe_offset = _u32le(data, 0x3C)
        if pe_offset < len(data) and data[pe_offset : pe_offset + 4] == b"PE\x00\x00":
            return "mzpe"
    return None


def _elf(data: bytes) -> str | None:
    if len(data) > 8 and data[:4] == b"\x7fELF":
        if data[4] in (1, 2) and data[5] in (1, 2) and data[6] == 1:
            return "elf"
    return None


def _macho(data: bytes) -> str | None:
    if len(data) > 12 and data[:4] in (b"\xce\xfa\xed\xfe", b"\xcf\xfa\xed\xfe"):
        return "macho"
    return None


def _midi(data: bytes) -> str | None:
    if len(data) > 18 and data[:8] == b"MThd\x00\x00\x00\x06" and data[14:18] == b"MTrk":
        return "midi"
    return None


_RIFF_FORMS = (
    (b"AVI ", "avi"),
    (b"CDXA", "vcd_dat"),
    (b"DLS ", "dls"),
    (b"WAVE", "wav"),
    (b"WEBP", "webp"),
    (b"ACON", "ani"),
    (b"CDR", "cdr"),
)


def _riff(data: bytes) -> str | None:
    if len(data) > 16 and data[:4] == b"RIFF":
        form = bytes(data[8:12])
        for prefix, name in _RIFF_FORMS:
            if form.startswith(prefix):
                return name
    return None


def _pcap(data: bytes) -> str | None:
    if len(data) > 23:
        if data[:2] in (b"\xd4\xc3", b"\x4d\x3c") and data[2:4] == b"\xb2\xa1":
            if data[4] <= 2 and data[5] == 0 and data[6] <= 4 and data[7] == 0:
                return "pcap"
        elif data[:2] == b"\xa1\xb2" and data[2:4] in (b"\xc3\xd4", b"\x3c\x4d"):
            if data[4] == 0 and data[5] <= 2 and data[6] == 0 and data[7] <= 4:
                return "pcap"
    return None


def _pcapng(data: bytes) -> str | None:
    if len(data) > 44 and data[:4] == b"\x0a\x0d\x0d\x0a":
        if data[8:12] in (b"\x4d\x3c\x2b\x1a", b"\x1a\x2b\x3c\x4d"):
            return "pcapng"
    return None


# Checks grouped by the first byte of the signature they recognise.
_CHECKS_BY_FIRST_BYTE: dict[int, tuple[SignatureCheck, ...]] = {
    0x00: (_ico,),
    0x04: (_lz4,),
    0x0A: (_pcapng,),
    0x1F: (_gzip,),
    0x21: (_deb,),
    0x37: (_sevenzip, _zpaq),
    0x42: (_bmp, _bzip2),
    0x47: (_gif,),
    0x4C: (_lzip,),
    0x4D: (_cab, _mzpe, _midi, _pcap),
    0x50: (_zip,),
    0x52: (_riff, _rar),
    0x6B: (_dmg,),
    0x78: (_xar,),
    0x7A: (_zpaq_blk,),
    0x7F: (_elf,),
    0x89: (_png, _lzo),
    0xA1: (_pcap,),
    0xCA: (_java,),
    0xCE: (_macho,),
    0xCF: (_macho,),
    0xD4: (_pcap,),
    0xED: (_rpm,),
    0xEF: (_nsis,),
    0xFD: (_xz,),
    0xFF: (_jpeg,),
}


def checks_for(first_byte: int) -> tuple[SignatureCheck, ...]:
    """The checks, in order, for signatures starting with `first_byte`."""
    return _CHECKS_BY_FIRST_BYTE.get(first_byte, ())