"""Synthetic PostgreSQL pages for tests."""

import struct

from pghexedit.primitives import Block
from pghexedit.storage.layout import BTreeLayout, PageLayout
from pghexedit.storage.page import LinePointerStatus

PAGE_SIZE = 8192


class PageBuilder:
    """
    Builds a little-endian page image one piece at a time.

    Items are placed from the start of the special section downwards, like
    PostgreSQL does, unless an explicit offset is given.
    """

    def __init__(self, page_size: int = PAGE_SIZE, special_size: int = 0):
        self.page_size = page_size
        self.page = bytearray(page_size)
        self.special = page_size - special_size
        self.upper = self.special
        self.items = []
        self.flags = 0
        self.checksum = 0
        self.layout_version = PageLayout.PG_PAGE_LAYOUT_VERSION
        self.prune_xid = 0
        self.lower = None

    def add_item(self, data: bytes, status=LinePointerStatus.LP_NORMAL,
                 offset: int = None, length: int = None) -> int:
        """Store raw item bytes and return the new 1-based slot number."""
        if length is None:
            length = len(data)
        if offset is None:
            self.upper = (self.upper - len(data)) & ~(PageLayout.MAXIMUM_ALIGNOF - 1)
            offset = self.upper
        else:
            self.upper = min(self.upper, offset)
        self.page[offset:offset + len(data)] = data
        self.items.append((offset, status, length))
        return len(self.items)

    def add_pointer(self, offset: int, length: int, status=LinePointerStatus.LP_NORMAL) -> int:
        """Add an item pointer without writing any item bytes."""
        self.items.append((offset, status, length))
        return len(self.items)

    def add_heap_tuple(self, payload: bytes = b"", xmin: int = 100, xmax: int = 0,
                       field3: int = 0, ctid=(0, 1), infomask: int = 0,
                       infomask2: int = 1, hoff: int = 24, bits: bytes = b"",
                       offset: int = None) -> int:
        header = struct.pack("<IIIHHHHHB", xmin, xmax, field3,
                             ctid[0] >> 16, ctid[0] & 0xFFFF, ctid[1],
                             infomask2, infomask, hoff)
        pad = bytes(max(0, hoff - len(header) - len(bits)))
        return self.add_item(header + bits + pad + payload, offset=offset)

    def add_index_tuple(self, key: bytes = b"", heap_tid=(0, 1),
                        status=LinePointerStatus.LP_NORMAL, offset: int = None) -> int:
        size = 8 + len(key)
        header = struct.pack("<HHHH", heap_tid[0] >> 16, heap_tid[0] & 0xFFFF,
                             heap_tid[1], size)
        return self.add_item(header + key, status=status, offset=offset)

    def set_btree_opaque(self, prev: int = 0, next_: int = 0, level: int = 0,
                         flags: int = 0, cycle_id: int = 0) -> 'PageBuilder':
        struct.pack_into("<IIIHH", self.page, self.special, prev, next_, level, flags, cycle_id)
        return self

    def set_btree_meta(self, magic: int = 0x053162, version: int = 3, root: int = 1,
                       level: int = 0, fastroot: int = 1, fastlevel: int = 0) -> 'PageBuilder':
        struct.pack_into("<6I", self.page, BTreeLayout.META_START,
                         magic, version, root, level, fastroot, fastlevel)
        return self

    def set_special_bytes(self, offset_in_special: int, data: bytes) -> 'PageBuilder':
        start = self.special + offset_in_special
        self.page[start:start + len(data)] = data
        return self

    def set_page_id(self, page_id: int) -> 'PageBuilder':
        struct.pack_into("<H", self.page, self.page_size - 2, page_id)
        return self

    def build(self) -> bytes:
        lower = self.lower
        if lower is None:
            lower = PageLayout.SIZE_OF_PAGE_HEADER + PageLayout.ITEM_ID_SIZE * len(self.items)

        struct.pack_into("<IIHHHHHHI", self.page, 0,
                         0, 0x01000000, self.checksum, self.flags, lower, self.upper,
                         self.special, self.page_size | self.layout_version,
                         self.prune_xid)

        for index, (offset, status, length) in enumerate(self.items):
            word = offset | (int(status) << 15) | (length << 17)
            struct.pack_into("<I", self.page,
                             PageLayout.SIZE_OF_PAGE_HEADER + index * PageLayout.ITEM_ID_SIZE,
                             word)
        return bytes(self.page)

    def block(self, block_number: int = 0, available: int = None) -> Block:
        data = self.build()
        if available is not None:
            data = data[:available]
        return Block(data, block_number, self.page_size)


def btree_page(flags: int, level: int = 0, cycle_id: int = 0) -> PageBuilder:
    """A B-Tree page builder with its opaque special section filled in."""
    builder = PageBuilder(special_size=BTreeLayout.OPAQUE_SIZE)
    builder.set_btree_opaque(level=level, flags=flags, cycle_id=cycle_id)
    return builder


def labels(annotations) -> list:
    return [annotation.label for annotation in annotations]


def spans(annotations) -> list:
    return [(annotation.start, annotation.end) for annotation in annotations]
