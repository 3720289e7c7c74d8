from pghexedit.decoder.context import PageContext
from pghexedit.storage.layout import Color, PageLayout
from pghexedit.storage.page import ItemPointer, PageHeader, directory_offset


class ItemDirectoryDecoder:
    """Tags every item pointer of the directory that follows the page header."""

    def decode(self, ctx: PageContext, header: PageHeader) -> list[ItemPointer]:
        """
        Emit one tag per slot, in slot order.

        Slots whose four bytes were not read are left out; the caller has
        already reported the truncation.

        Returns:
            The item pointers that could be read
        """
        items = []
        for slot in range(1, header.max_offset_number + 1):
            offset = directory_offset(slot)
            if not ctx.block.has_bytes(offset, PageLayout.ITEM_ID_SIZE):
                break

            item = ItemPointer.read(ctx.block, slot)
            ctx.emitter.tuple_field(
                slot,
                f"lp_len: {item.length}, lp_off: {item.offset}, lp_flags: {item.status.name}",
                Color.BLUE_LIGHT,
                offset,
                PageLayout.ITEM_ID_SIZE)
            items.append(item)
        return items
