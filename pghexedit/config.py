from dataclasses import dataclass
from typing import Optional

from pghexedit.core.exceptions import OptionError
from pghexedit.storage.layout import PageLayout


@dataclass
class RunConfig:
    """Options controlling one annotation run."""
    verify_checksums: bool = False
    skip_leaf_pages: bool = False
    block_start: Optional[int] = None
    block_end: Optional[int] = None
    segment_size: int = PageLayout.RELSEG_SIZE * PageLayout.BLCKSZ
    segment_number: int = 0
    segment_number_forced: bool = False

    def __post_init__(self):
        if self.segment_size <= 0:
            raise OptionError(
                f"Invalid segment size requested <{self.segment_size}>")
        if self.segment_number < 0:
            raise OptionError(
                f"Invalid segment number requested <{self.segment_number}>")
        if self.block_start is not None:
            if self.block_start < 0:
                raise OptionError(
                    f"Invalid range start identifier <{self.block_start}>")
            if self.block_end is None:
                # A start block without an end formats the single block
                self.block_end = self.block_start
            elif self.block_end < self.block_start:
                raise OptionError(
                    f"Requested block range start <{self.block_start}> is "
                    f"greater than end <{self.block_end}>")
        elif self.block_end is not None:
            raise OptionError("Block range end given without a range start")

    @property
    def has_block_range(self) -> bool:
        return self.block_start is not None
