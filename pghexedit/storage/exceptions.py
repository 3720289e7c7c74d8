from pghexedit.core.exceptions import HexEditError


class StorageError(HexEditError):
    """Base class for storage-related errors"""
    pass


class BlockReadError(StorageError):
    """Raised when blocks cannot be read from the relation file"""
    pass


class StructuralCorruptionError(StorageError):
    """
    Base class for fatal page corruption.

    Raising one of these ends the whole run. partial_annotations carries the
    tags already produced for the failing page so they can still be written.
    """
    def __init__(self, message: str, block_number: int = -1):
        super().__init__(message)
        self.block_number = block_number
        self.partial_annotations = []


class EmptyPageError(StructuralCorruptionError):
    """Raised when a page that should list items has an empty item directory."""
    pass


class ItemIndexCorruptError(StructuralCorruptionError):
    """Raised when the item directory length is impossible for the page size."""
    pass


class ItemOverflowError(StructuralCorruptionError):
    """Raised when an item lies outside the page's tuple area."""
    def __init__(self, message: str, block_number: int = -1, item_start: int = -1, item_end: int = -1):
        super().__init__(message, block_number)
        self.item_start = item_start
        self.item_end = item_end


class UnsupportedItemFormatError(StructuralCorruptionError):
    """Raised when items are found on a page whose item format is not supported."""
    pass
