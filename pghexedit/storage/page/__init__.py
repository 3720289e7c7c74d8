from .page_header import PageHeader
from .item_id import ItemPointer, LinePointerStatus, directory_offset

__all__ = ["PageHeader", "ItemPointer", "LinePointerStatus", "directory_offset"]
