from enum import Enum
from dataclasses import dataclass


class ConditionKind(Enum):
    """Non-fatal problems found while decoding a page."""
    TRUNCATION = "truncation"
    SPECIAL_SECTION_ERROR = "special_section_error"
    HEADER_INCONSISTENCY = "header_inconsistency"
    TUPLE_HEADER_MISMATCH = "tuple_header_mismatch"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    UNSUPPORTED_SPECIAL_FAMILY = "unsupported_special_family"


@dataclass(frozen=True)
class Condition:
    """A reported, non-fatal decoding problem."""
    kind: ConditionKind
    block_number: int
    message: str

    def __str__(self) -> str:
        return f"block {self.block_number}: {self.message}"
