from dataclasses import dataclass

from pghexedit.primitives import Block
from pghexedit.storage.layout import IndexTupleLayout


@dataclass(frozen=True)
class IndexTupleHeader:
    """IndexTupleData: a heap TID followed by a size/flags word."""
    tid_block_hi: int
    tid_block_lo: int
    tid_offset: int
    info: int

    @classmethod
    def read(cls, block: Block, offset: int) -> 'IndexTupleHeader':
        return cls(tid_block_hi=block.read_uint16(offset + IndexTupleLayout.T_TID),
                   tid_block_lo=block.read_uint16(offset + IndexTupleLayout.T_TID + 2),
                   tid_offset=block.read_uint16(offset + IndexTupleLayout.T_TID + 4),
                   info=block.read_uint16(offset + IndexTupleLayout.T_INFO))

    @property
    def size(self) -> int:
        """Total tuple size, header included."""
        return self.info & IndexTupleLayout.INDEX_SIZE_MASK

    @property
    def has_contents(self) -> bool:
        """Minus-infinity items carry no key at all."""
        return self.size > IndexTupleLayout.HEADER_SIZE
