from pghexedit.decoder.context import PageContext
from pghexedit.storage.exceptions import ItemOverflowError
from pghexedit.storage.layout import Color, IndexTupleLayout
from pghexedit.storage.page import ItemPointer
from pghexedit.storage.tuple import IndexTupleHeader


class IndexTupleDecoder:
    """Tags the TID, the t_info word and the key bytes of one index tuple."""

    def decode(self, ctx: PageContext, item: ItemPointer, area_end: int) -> int:
        """
        Args:
            ctx: Page being decoded
            item: The item pointer of the tuple
            area_end: Page offset the tuple may not extend past

        Returns:
            Page offset just past the tuple
        """
        slot = item.slot
        start = item.offset
        emitter = ctx.emitter

        header = IndexTupleHeader.read(ctx.block, start)
        end = start + max(header.size, IndexTupleLayout.HEADER_SIZE)
        if end > area_end or end > ctx.block.available:
            raise ItemOverflowError(
                f"Index tuple ({ctx.block.block_number},{slot}) of {header.size} bytes "
                f"at offset {start} extends beyond the block. "
                f"Bytes read: {ctx.block.available}",
                block_number=ctx.block.block_number,
                item_start=start,
                item_end=end)

        # TID colors match the heap tuple decoder
        tid = start + IndexTupleLayout.T_TID
        emitter.tuple_field(slot, "t_tid->bi_hi", Color.BLUE_LIGHT, tid, 2)
        emitter.tuple_field(slot, "t_tid->bi_lo", Color.BLUE_LIGHT, tid + 2, 2)
        emitter.tuple_field(slot, "t_tid->offsetNumber", Color.BLUE_DARK, tid + 4, 2)
        emitter.tuple_field(slot, "t_info", Color.YELLOW_DARK, start + IndexTupleLayout.T_INFO, 2)

        # "minus infinity" items have no contents
        if header.has_contents:
            emitter.tuple_tag(slot, "contents", Color.WHITE,
                              start + IndexTupleLayout.HEADER_SIZE, start + header.size - 1)
        return end
