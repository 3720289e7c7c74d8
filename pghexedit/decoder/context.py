from dataclasses import dataclass, field
from typing import Optional

from pghexedit.core.conditions import Condition, ConditionKind
from pghexedit.core.emitter import PageEmitter
from pghexedit.core.session import DecodeSession
from pghexedit.primitives import Annotation, Block
from pghexedit.storage.special import BTreeMetaData, SpecialSectionInfo


@dataclass
class PageResult:
    """Everything decoding one block produced."""
    block_number: int
    special: SpecialSectionInfo
    annotations: list[Annotation] = field(default_factory=list)
    conditions: list[Condition] = field(default_factory=list)
    level: Optional[int] = None
    is_meta: bool = False
    meta: Optional[BTreeMetaData] = None
    truncated: bool = False
    leaf_elided: bool = False

    def has_condition(self, kind: ConditionKind) -> bool:
        return any(condition.kind == kind for condition in self.conditions)


class PageContext:
    """Per-page state handed from one decoder to the next."""

    def __init__(self,
                 session: DecodeSession,
                 block: Block,
                 base_offset: int,
                 special: SpecialSectionInfo,
                 level: Optional[int] = None):
        self.session = session
        self.block = block
        self.special = special
        self.emitter = PageEmitter(session, block.block_number, base_offset, level)
        self.result = PageResult(block_number=block.block_number,
                                 special=special,
                                 annotations=self.emitter.annotations,
                                 level=level)

    @property
    def page_size(self) -> int:
        return self.session.page_size

    def report(self, kind: ConditionKind, message: str) -> Condition:
        condition = Condition(kind, self.block.block_number, message)
        self.result.conditions.append(condition)
        return self.session.report(condition)
