"""Custom exceptions for the page annotator."""


class HexEditError(Exception):
    """Base exception for annotator errors."""
    pass


class OptionError(HexEditError):
    """Raised when the command line or run configuration is invalid."""
    pass


class AnnotationOrderError(HexEditError):
    """Raised when a tag would start before the previous tag of the same page."""
    def __init__(self, message: str, block_number: int = -1, previous_start: int = None, start: int = None):
        super().__init__(message)
        self.block_number = block_number
        self.previous_start = previous_start
        self.start = start
