from enum import Enum


class PageLayout:
    """
    Byte layout of a PostgreSQL 11 page, little-endian, MAXALIGN 8.

    Page Layout:
    ┌──────────────────────────────────────────────────────────┐
    │ PageHeaderData (24 bytes)                                │
    │   pd_lsn | pd_checksum | pd_flags | pd_lower | pd_upper  │
    │   pd_special | pd_pagesize_version | pd_prune_xid        │
    ├──────────────────────────────────────────────────────────┤
    │ ItemIdData[] (4 bytes each) ...           → pd_lower     │
    ├──────────────────────────────────────────────────────────┤
    │ free space ("hole")                                      │
    ├──────────────────────────────────────────────────────────┤
    │ pd_upper ←  ... tuples, growing backwards                │
    ├──────────────────────────────────────────────────────────┤
    │ pd_special → special section (index opaque data)         │
    └──────────────────────────────────────────────────────────┘
    """
    MAXIMUM_ALIGNOF = 8

    # PageHeaderData field offsets
    PD_LSN = 0
    PD_CHECKSUM = 8
    PD_FLAGS = 10
    PD_LOWER = 12
    PD_UPPER = 14
    PD_SPECIAL = 16
    PD_PAGESIZE_VERSION = 18
    PD_PRUNE_XID = 20

    LSN_SIZE = 8
    SIZE_OF_PAGE_HEADER = 24  # offsetof(PageHeaderData, pd_linp)
    ITEM_ID_SIZE = 4
    PAGE_HEADER_STRUCT_SIZE = SIZE_OF_PAGE_HEADER + ITEM_ID_SIZE

    PAGE_SIZE_MASK = 0xFF00
    LAYOUT_VERSION_MASK = 0x00FF
    PG_PAGE_LAYOUT_VERSION = 4

    BLCKSZ = 8192
    RELSEG_SIZE = 131072  # blocks per segment file

    @staticmethod
    def maxalign(length: int) -> int:
        """Round length up to the platform maximum alignment."""
        align = PageLayout.MAXIMUM_ALIGNOF
        return (length + align - 1) & ~(align - 1)


class HeapTupleLayout:
    """Field offsets within HeapTupleHeaderData."""
    T_XMIN = 0
    T_XMAX = 4
    T_FIELD3 = 8  # t_cid or t_xvac
    T_CTID = 12
    T_INFOMASK2 = 18
    T_INFOMASK = 20
    T_HOFF = 22
    T_BITS = 23

    TRANSACTION_ID_SIZE = 4
    OID_SIZE = 4
    NATTS_MASK = 0x07FF

    @staticmethod
    def bitmap_length(natts: int) -> int:
        return (natts + 7) // 8


class IndexTupleLayout:
    """Field offsets within IndexTupleData."""
    T_TID = 0
    T_INFO = 6
    HEADER_SIZE = 8
    INDEX_SIZE_MASK = 0x1FFF


class BTreeLayout:
    """Field offsets within BTPageOpaqueData and BTMetaPageData."""
    BTPO_PREV = 0
    BTPO_NEXT = 4
    BTPO_LEVEL = 8
    BTPO_FLAGS = 12
    BTPO_CYCLEID = 14
    OPAQUE_SIZE = 16

    MAX_BT_CYCLE_ID = 0xFF7F

    META_FIELDS = ("btm_magic", "btm_version", "btm_root",
                   "btm_level", "btm_fastroot", "btm_fastlevel")
    META_FIELD_SIZE = 4
    META_START = 24  # MAXALIGN(SizeOfPageHeaderData)
    META_SIZE = len(META_FIELDS) * META_FIELD_SIZE


class SpecialLayout:
    """Opaque special-section sizes and page ids of the other access methods."""
    SEQUENCE_MAGIC = 0x1717

    HASH_OPAQUE_SIZE = 16
    HASHO_PAGE_ID = 0xFF80

    GIST_OPAQUE_SIZE = 16
    GIST_PAGE_ID = 0xFF81

    SPGIST_OPAQUE_SIZE = 8
    SPGIST_PAGE_ID = 0xFF82

    GIN_OPAQUE_SIZE = 8

    PAGE_ID_SIZE = 2


class Color(Enum):
    """Note colours understood by wxHexEditor tag files."""
    BLACK = "#515A5A"
    BLUE_DARK = "#2980B9"
    BLUE_LIGHT = "#3498DB"
    BROWN = "#97333D"
    GREEN_BRIGHT = "#50E964"
    GREEN_DARK = "#16A085"
    GREEN_LIGHT = "#1ABC9C"
    MAROON = "#E96950"
    PINK = "#E949D1"
    RED_DARK = "#912C21"
    RED_LIGHT = "#E74C3C"
    WHITE = "#CCD1D1"
    YELLOW_DARK = "#F1C40F"
    YELLOW_LIGHT = "#E9E850"


FONT_COLOUR = "#313739"
