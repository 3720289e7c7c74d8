from enum import Enum

from pghexedit.core.session import DecodeSession
from pghexedit.decoder.context import PageContext, PageResult
from pghexedit.decoder.heap_tuple import HeapTupleDecoder
from pghexedit.decoder.index_tuple import IndexTupleDecoder
from pghexedit.decoder.page_header import HeaderResult, PageHeaderDecoder
from pghexedit.decoder.special import SpecialSectionDecoder
from pghexedit.primitives import Block
from pghexedit.storage.exceptions import (EmptyPageError, ItemOverflowError,
                                          StructuralCorruptionError,
                                          UnsupportedItemFormatError)
from pghexedit.storage.geometry import block_offset
from pghexedit.storage.layout import Color, IndexTupleLayout
from pghexedit.storage.page import ItemPointer, LinePointerStatus
from pghexedit.storage.special import BTreeOpaque, SpecialSectionKind, classify_block
from pghexedit.utils.log import get_logger

logger = get_logger(__name__)


class ItemFormat(Enum):
    HEAP = "heap"
    INDEX = "index"


# How the items of a page are laid out, by special section kind. Kinds that
# are missing (hash, GiST, GIN, SP-GiST) have item layouts we do not decode.
ITEM_FORMATS = {
    SpecialSectionKind.NONE: ItemFormat.HEAP,
    SpecialSectionKind.SEQUENCE: ItemFormat.HEAP,
    SpecialSectionKind.ERROR_UNKNOWN: ItemFormat.HEAP,
    SpecialSectionKind.ERROR_BOUNDARY: ItemFormat.HEAP,
    SpecialSectionKind.BTREE: ItemFormat.INDEX,
}

# Line pointer states whose item has storage worth decoding
DECODED_STATUSES = {
    ItemFormat.HEAP: frozenset({LinePointerStatus.LP_NORMAL}),
    ItemFormat.INDEX: frozenset({LinePointerStatus.LP_NORMAL, LinePointerStatus.LP_DEAD}),
}


def root_overrides_leaf_skip(opaque: BTreeOpaque) -> bool:
    """
    A root page is always decoded in full, even when it is also a leaf
    (before the first root split).
    """
    return opaque.is_root


def should_elide_leaf(opaque: BTreeOpaque, skip_leaf_pages: bool) -> bool:
    """Whether a B-Tree page gets a single whole-page tag instead of a full decode."""
    return skip_leaf_pages and opaque.is_leaf and not root_overrides_leaf_skip(opaque)


class PageDecoder:
    """
    Decodes one block into tags.

    Order of work for a block:
    1. Classify the special section (this also yields the B-Tree level)
    2. Header fields, then the meta struct or the item directory
    3. Tuples, visited in ascending offset order
    4. Special section fields

    Non-fatal problems are reported through the session and decoding goes
    on; StructuralCorruptionError subclasses are raised and end the run.
    """

    def __init__(self, session: DecodeSession):
        self.session = session
        self.header_decoder = PageHeaderDecoder()
        self.heap_decoder = HeapTupleDecoder()
        self.index_decoder = IndexTupleDecoder()
        self.special_decoder = SpecialSectionDecoder()

    def decode_block(self, block: Block) -> PageResult:
        if block.page_size != self.session.page_size:
            raise ValueError(
                f"Block page size {block.page_size} does not match the run's "
                f"page size {self.session.page_size}")

        base_offset = block_offset(block.block_number, self.session.page_size)
        special = classify_block(block)
        logger.debug("Block %d: special section %s", block.block_number, special.kind.value)

        level = None
        if special.kind == SpecialSectionKind.BTREE:
            opaque = BTreeOpaque.read(block, special.offset)
            level = opaque.level

            if should_elide_leaf(opaque, self.session.config.skip_leaf_pages):
                ctx = PageContext(self.session, block, base_offset, special, level)
                ctx.emitter.page_tag("leaf page", Color.GREEN_DARK, 0, self.session.page_size - 1)
                ctx.result.leaf_elided = True
                return ctx.result

        ctx = PageContext(self.session, block, base_offset, special, level)
        try:
            self._decode_page(ctx)
        except StructuralCorruptionError as e:
            e.partial_annotations = list(ctx.result.annotations)
            raise
        return ctx.result

    def _decode_page(self, ctx: PageContext) -> None:
        header = self.header_decoder.decode(ctx)
        ctx.result.is_meta = header.is_meta
        ctx.result.meta = header.meta

        # Nothing past a truncated header or item directory is decoded
        if header.truncated:
            return

        self._decode_items(ctx, header)
        self.special_decoder.decode(ctx)

    def _decode_items(self, ctx: PageContext, header: HeaderResult) -> None:
        # The meta struct sits where items would normally be
        if header.is_meta:
            return

        block_number = ctx.block.block_number
        if header.header.max_offset_number == 0:
            raise EmptyPageError("Empty block - no items listed", block_number)

        item_format = ITEM_FORMATS.get(ctx.special.kind)
        if item_format is None:
            raise UnsupportedItemFormatError(
                f"Items on {ctx.special.kind.value} pages cannot be decoded", block_number)

        statuses = DECODED_STATUSES[item_format]
        items = [item for item in header.items
                 if item.status in statuses and item.has_storage]
        items.sort(key=lambda item: (item.offset, item.slot))

        area_start = header.header.directory_end
        area_end = ctx.page_size
        if not ctx.special.kind.is_error and ctx.special.kind != SpecialSectionKind.NONE:
            area_end = ctx.special.offset

        previous = None
        previous_end = area_start
        for item in items:
            if previous is not None and item.offset < previous_end:
                raise ItemOverflowError(
                    f"Item ({block_number},{item.slot}) at offset <{item.offset}> overlaps "
                    f"item ({block_number},{previous.slot}) ending at <{previous_end}>",
                    block_number=block_number,
                    item_start=item.offset,
                    item_end=item.end)

            if item_format == ItemFormat.HEAP:
                self._check_extent(ctx, item, item.end, area_start, area_end)
                self.heap_decoder.decode(ctx, item)
                end = item.end
            else:
                self._check_extent(ctx, item, item.offset + IndexTupleLayout.HEADER_SIZE,
                                   area_start, area_end)
                end = self.index_decoder.decode(ctx, item, area_end)
            previous, previous_end = item, end

    def _check_extent(self, ctx: PageContext, item: ItemPointer, end: int,
                      area_start: int, area_end: int) -> None:
        """Make sure an item can physically fit on the block before decoding it."""
        block = ctx.block
        if item.offset < area_start or end > area_end or end > block.available:
            raise ItemOverflowError(
                f"Item contents extend beyond block. BlockSize<{ctx.page_size}> "
                f"Bytes Read<{block.available}> Item ({block.block_number},{item.slot}) "
                f"spans <{item.offset}> to <{end}>",
                block_number=block.block_number,
                item_start=item.offset,
                item_end=end)
