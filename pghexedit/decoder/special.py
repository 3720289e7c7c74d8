from pghexedit.core.conditions import ConditionKind
from pghexedit.decoder.context import PageContext
from pghexedit.storage.flags import BTreePageFlag, format_flags
from pghexedit.storage.layout import BTreeLayout, Color
from pghexedit.storage.special import BTreeOpaque, SpecialSectionKind

# Special sections whose fields can be tagged
SUPPORTED_SPECIAL_FAMILIES = frozenset({SpecialSectionKind.BTREE})


class SpecialSectionDecoder:
    """Tags the fields of a page's special section, where the layout is known."""

    def decode(self, ctx: PageContext) -> None:
        info = ctx.special
        if info.kind == SpecialSectionKind.NONE:
            return

        if info.kind.is_error:
            ctx.report(ConditionKind.SPECIAL_SECTION_ERROR,
                       f"Invalid special section encountered ({info.kind.value}, "
                       f"pd_special <{info.offset}>)")
            return

        if info.kind not in SUPPORTED_SPECIAL_FAMILIES:
            ctx.report(ConditionKind.UNSUPPORTED_SPECIAL_FAMILY,
                       f"Unsupported special section type. Type: <{info.kind.value}>")
            return

        self._decode_btree(ctx, info.offset)

    def _decode_btree(self, ctx: PageContext, special: int) -> None:
        opaque = BTreeOpaque.read(ctx.block, special)
        emitter = ctx.emitter

        emitter.page_field("btpo_prev", Color.BLACK, special + BTreeLayout.BTPO_PREV, 4)
        emitter.page_field("btpo_next", Color.BLACK, special + BTreeLayout.BTPO_NEXT, 4)
        emitter.page_field("btpo.level", Color.BLACK, special + BTreeLayout.BTPO_LEVEL, 4)
        emitter.page_field(f"btpo_flags - {format_flags(opaque.flags, BTreePageFlag)}".rstrip(),
                           Color.BLACK, special + BTreeLayout.BTPO_FLAGS, 2)
        emitter.page_field("btpo_cycleid", Color.BLACK, special + BTreeLayout.BTPO_CYCLEID, 2)
