from enum import IntFlag


class PageFlag(IntFlag):
    """pd_flags bits."""
    PD_HAS_FREE_LINES = 0x0001
    PD_PAGE_FULL = 0x0002
    PD_ALL_VISIBLE = 0x0004


class InfomaskFlag(IntFlag):
    """t_infomask bits of a heap tuple header."""
    HEAP_HASNULL = 0x0001
    HEAP_HASVARWIDTH = 0x0002
    HEAP_HASEXTERNAL = 0x0004
    HEAP_HASOID = 0x0008
    HEAP_XMAX_KEYSHR_LOCK = 0x0010
    HEAP_COMBOCID = 0x0020
    HEAP_XMAX_EXCL_LOCK = 0x0040
    HEAP_XMAX_LOCK_ONLY = 0x0080
    HEAP_XMIN_COMMITTED = 0x0100
    HEAP_XMIN_INVALID = 0x0200
    HEAP_XMAX_COMMITTED = 0x0400
    HEAP_XMAX_INVALID = 0x0800
    HEAP_XMAX_IS_MULTI = 0x1000
    HEAP_UPDATED = 0x2000
    HEAP_MOVED_OFF = 0x4000
    HEAP_MOVED_IN = 0x8000


HEAP_MOVED = InfomaskFlag.HEAP_MOVED_OFF | InfomaskFlag.HEAP_MOVED_IN


class Infomask2Flag(IntFlag):
    """t_infomask2 bits; the low 11 bits hold the attribute count."""
    HEAP_KEYS_UPDATED = 0x2000
    HEAP_HOT_UPDATED = 0x4000
    HEAP_ONLY_TUPLE = 0x8000


class BTreePageFlag(IntFlag):
    """btpo_flags bits of a B-Tree page's special section."""
    BTP_LEAF = 0x0001
    BTP_ROOT = 0x0002
    BTP_DELETED = 0x0004
    BTP_META = 0x0008
    BTP_HALF_DEAD = 0x0010
    BTP_SPLIT_END = 0x0020
    BTP_HAS_GARBAGE = 0x0040
    BTP_INCOMPLETE_SPLIT = 0x0080


def decode_flags(value: int, flag_type: type[IntFlag]) -> list[IntFlag]:
    """
    Decode a bitmask into the named flags it sets.

    Flags come back in declaration order so that the result is stable.
    Bits with no name are ignored.
    """
    return [flag for flag in flag_type if value & flag]


def format_flags(value: int, flag_type: type[IntFlag]) -> str:
    """Render the named flags set in value as a '|'-separated list."""
    return "|".join(flag.name for flag in decode_flags(value, flag_type))
