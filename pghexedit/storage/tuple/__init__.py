from .heap_tuple import HeapTupleHeader
from .index_tuple import IndexTupleHeader

__all__ = ["HeapTupleHeader", "IndexTupleHeader"]
