"""
pghexedit - annotate PostgreSQL relation files for the wxHexEditor hex editor.

Every block of a heap or B-Tree index file is decoded into labeled byte
ranges: page header fields, item pointers, tuple header fields, opaque tuple
contents and the B-Tree special section.
"""

__version__ = "11.0"

from .config import RunConfig
from .core import HexEditError
from .core.session import DecodeSession
from .decoder import PageDecoder, PageResult
from .primitives import Annotation, Block

__all__ = ["RunConfig", "DecodeSession", "HexEditError", "PageDecoder",
           "PageResult", "Annotation", "Block", "__version__"]
