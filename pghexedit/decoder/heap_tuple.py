from pghexedit.core.conditions import ConditionKind
from pghexedit.decoder.context import PageContext
from pghexedit.storage.flags import Infomask2Flag, InfomaskFlag, format_flags
from pghexedit.storage.layout import Color, HeapTupleLayout
from pghexedit.storage.page import ItemPointer
from pghexedit.storage.tuple import HeapTupleHeader


def flag_label(field_name: str, value: int, flag_type) -> str:
    names = format_flags(value, flag_type)
    return f"{field_name} ( {names} )" if names else f"{field_name} ( )"


class HeapTupleDecoder:
    """
    Tags the header fields and contents of one heap tuple.

    Whether the third header field is t_cid or t_xvac depends on t_infomask,
    which is stored after it, so the whole header is read before the first
    tag is emitted. xmin and xmax share a color; the TID block number halves
    use the item pointer color.
    """

    def decode(self, ctx: PageContext, item: ItemPointer) -> None:
        slot = item.slot
        start = item.offset
        emitter = ctx.emitter

        if item.length < HeapTupleLayout.T_BITS:
            ctx.report(ConditionKind.TUPLE_HEADER_MISMATCH,
                       f"Item ({ctx.block.block_number},{slot}) of {item.length} bytes "
                       f"is too short for a heap tuple header")
            emitter.tuple_tag(slot, "contents", Color.WHITE, start, item.end - 1)
            return

        header = HeapTupleHeader.read(ctx.block, start)

        emitter.tuple_field(slot, "xmin", Color.RED_LIGHT,
                            start + HeapTupleLayout.T_XMIN, HeapTupleLayout.TRANSACTION_ID_SIZE)
        emitter.tuple_field(slot, "xmax", Color.RED_LIGHT,
                            start + HeapTupleLayout.T_XMAX, HeapTupleLayout.TRANSACTION_ID_SIZE)
        if header.is_moved:
            # Only a tuple from old-style VACUUM FULL, carried over by an upgrade
            emitter.tuple_field(slot, "t_xvac", Color.PINK,
                                start + HeapTupleLayout.T_FIELD3, HeapTupleLayout.TRANSACTION_ID_SIZE)
        else:
            emitter.tuple_field(slot, "t_cid", Color.RED_DARK,
                                start + HeapTupleLayout.T_FIELD3, HeapTupleLayout.TRANSACTION_ID_SIZE)

        ctid = start + HeapTupleLayout.T_CTID
        emitter.tuple_field(slot, "t_ctid->bi_hi", Color.BLUE_LIGHT, ctid, 2)
        emitter.tuple_field(slot, "t_ctid->bi_lo", Color.BLUE_LIGHT, ctid + 2, 2)
        emitter.tuple_field(slot, "t_ctid->offsetNumber", Color.BLUE_DARK, ctid + 4, 2)

        emitter.tuple_field(slot, flag_label("t_infomask2", header.infomask2, Infomask2Flag),
                            Color.GREEN_LIGHT, start + HeapTupleLayout.T_INFOMASK2, 2)
        emitter.tuple_field(slot, flag_label("t_infomask", header.infomask, InfomaskFlag),
                            Color.GREEN_DARK, start + HeapTupleLayout.T_INFOMASK, 2)
        emitter.tuple_field(slot, "t_hoff", Color.YELLOW_DARK,
                            start + HeapTupleLayout.T_HOFF, 1)

        computed = header.computed_header_length
        if computed != header.hoff:
            ctx.report(ConditionKind.TUPLE_HEADER_MISMATCH,
                       f"Computed header length not equal to header size for "
                       f"({ctx.block.block_number},{slot}). "
                       f"Computed <{computed}>  Header: <{header.hoff}>")

        # Null bitmap, with any Oid as its last four bytes
        bits_end = min(header.hoff, item.length)
        if bits_end > HeapTupleLayout.T_BITS:
            emitter.tuple_tag(slot, "t_bits", Color.YELLOW_DARK,
                              start + HeapTupleLayout.T_BITS, start + bits_end - 1)

        contents_start = max(header.hoff, HeapTupleLayout.T_BITS)
        if contents_start < item.length:
            emitter.tuple_tag(slot, "contents", Color.WHITE,
                              start + contents_start, item.end - 1)
