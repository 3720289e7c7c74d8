from dataclasses import dataclass, field
from typing import Optional

from pghexedit.core.conditions import ConditionKind
from pghexedit.decoder.context import PageContext
from pghexedit.decoder.item_directory import ItemDirectoryDecoder
from pghexedit.storage.exceptions import ItemIndexCorruptError
from pghexedit.storage.flags import PageFlag, format_flags
from pghexedit.storage.geometry import checksum_block_number
from pghexedit.storage.layout import BTreeLayout, Color, PageLayout
from pghexedit.storage.page import ItemPointer, PageHeader
from pghexedit.storage.special import BTreeMetaData, is_btree_meta_page
from pghexedit.utils.log import get_logger

logger = get_logger(__name__)


@dataclass
class HeaderResult:
    """What the rest of the page decode needs to know about the header."""
    header: Optional[PageHeader] = None
    items: list[ItemPointer] = field(default_factory=list)
    is_meta: bool = False
    meta: Optional[BTreeMetaData] = None
    truncated: bool = False


class PageHeaderDecoder:
    """
    Tags the page header, then either the B-Tree meta struct or the item
    directory.

    Item pointers are tagged here rather than with the tuples because they
    sit right after the header, and tags must come out in offset order.
    """

    HEADER_FIELDS = (
        ("LSN", Color.YELLOW_LIGHT, PageLayout.PD_LSN, PageLayout.PD_CHECKSUM),
        ("checksum", Color.GREEN_BRIGHT, PageLayout.PD_CHECKSUM, PageLayout.PD_FLAGS),
        (None, Color.YELLOW_DARK, PageLayout.PD_FLAGS, PageLayout.PD_LOWER),
        ("pd_lower", Color.MAROON, PageLayout.PD_LOWER, PageLayout.PD_UPPER),
        ("pd_upper", Color.MAROON, PageLayout.PD_UPPER, PageLayout.PD_SPECIAL),
        ("pd_special", Color.GREEN_BRIGHT, PageLayout.PD_SPECIAL, PageLayout.PD_PAGESIZE_VERSION),
        ("pd_pagesize_version", Color.BROWN, PageLayout.PD_PAGESIZE_VERSION, PageLayout.PD_PRUNE_XID),
        ("pd_prune_xid", Color.RED_LIGHT, PageLayout.PD_PRUNE_XID, PageLayout.SIZE_OF_PAGE_HEADER),
    )

    def __init__(self):
        self.item_directory = ItemDirectoryDecoder()

    def decode(self, ctx: PageContext) -> HeaderResult:
        block = ctx.block
        result = HeaderResult()

        # Only attempt the header if all of it (minus the item array) was read
        if block.available < PageLayout.SIZE_OF_PAGE_HEADER:
            result.truncated = True
            self._report_truncation(ctx)
            return result

        header = PageHeader.parse(block)
        result.header = header

        result.is_meta = is_btree_meta_page(block)

        # No page can hold more item pointers than it has bytes
        if not result.is_meta and header.max_offset_number > ctx.page_size:
            raise ItemIndexCorruptError(
                f"Item index corrupt on block. Offset: <{header.max_offset_number}>",
                block.block_number)

        # The meta struct replaces the directory, whatever pd_lower says
        if (not result.is_meta and header.max_offset_number > 0
                and block.available < header.directory_end):
            result.truncated = True

        self._emit_header_fields(ctx, header)

        if result.is_meta:
            result.meta = self._emit_meta_fields(ctx)
        else:
            result.items = self.item_directory.decode(ctx, header)

        problems = header.problems(ctx.page_size)
        if problems:
            ctx.report(ConditionKind.HEADER_INCONSISTENCY,
                       "Invalid header information: " + "; ".join(problems))

        if ctx.session.config.verify_checksums:
            self._verify_checksum(ctx, header)

        if result.truncated:
            self._report_truncation(ctx)
        return result

    def _emit_header_fields(self, ctx: PageContext, header: PageHeader) -> None:
        for name, color, start, next_start in self.HEADER_FIELDS:
            if name is None:
                name = f"pd_flags - {format_flags(header.flags, PageFlag)}".rstrip()
            ctx.emitter.page_tag(name, color, start, next_start - 1)

    def _emit_meta_fields(self, ctx: PageContext) -> BTreeMetaData:
        meta = BTreeMetaData.read(ctx.block)
        logger.debug("Block %d: B-Tree meta page, root %d at level %d, fast root %d at level %d",
                     ctx.block.block_number, meta.root, meta.level, meta.fastroot, meta.fastlevel)

        offset = BTreeLayout.META_START
        for name in BTreeLayout.META_FIELDS:
            ctx.emitter.page_field(name, Color.PINK, offset, BTreeLayout.META_FIELD_SIZE)
            offset += BTreeLayout.META_FIELD_SIZE
        return meta

    def _verify_checksum(self, ctx: PageContext, header: PageHeader) -> None:
        block = ctx.block
        if not block.is_complete:
            logger.debug("Block %d is partial, checksum not verified", block.block_number)
            return

        config = ctx.session.config
        blkno = checksum_block_number(block.block_number, ctx.page_size,
                                      config.segment_size, config.segment_number)
        calculated = ctx.session.checksum_function(block.data, blkno)
        if calculated != header.checksum:
            ctx.report(ConditionKind.CHECKSUM_MISMATCH,
                       f"checksum failure: calculated 0x{calculated:04x}, "
                       f"stored 0x{header.checksum:04x}")

    def _report_truncation(self, ctx: PageContext) -> None:
        ctx.result.truncated = True
        ctx.report(ConditionKind.TRUNCATION,
                   f"End of block encountered within the header. "
                   f"Bytes read: {ctx.block.available}")
