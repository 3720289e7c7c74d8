"""
Run-wide plumbing shared by all decoders: exceptions, reported conditions,
the decode session (see core.session) and the tag emitter (see core.emitter).
"""

from .exceptions import HexEditError, OptionError, AnnotationOrderError
from .conditions import Condition, ConditionKind

__all__ = ["HexEditError", "OptionError", "AnnotationOrderError",
           "Condition", "ConditionKind"]
