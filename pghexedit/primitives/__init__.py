"""
The two values every decoder passes around: the Block being read and the
Annotations produced for it. Only the layout constants are imported here,
so any module can depend on these.
"""

from .block import Block
from .annotation import Annotation

__all__ = ["Block", "Annotation"]
