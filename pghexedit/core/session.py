from typing import Callable, Optional

from pghexedit.config import RunConfig
from pghexedit.core.conditions import Condition
from pghexedit.utils.log import get_logger

logger = get_logger(__name__)

ChecksumFunction = Callable[[bytes, int], int]


class DecodeSession:
    """
    Run-scoped state shared by every decoder.

    Holds the page size discovered from block 0, the run options, the tag
    number counter and the cumulative failure flag. Nothing else survives
    from one page to the next.
    """

    def __init__(self,
                 page_size: int,
                 config: Optional[RunConfig] = None,
                 checksum_function: Optional[ChecksumFunction] = None,
                 first_tag_id: int = 0):
        if page_size <= 0:
            raise ValueError(f"Page size must be positive, got {page_size}")

        self.page_size = page_size
        self.config = config or RunConfig()
        self.checksum_function = checksum_function
        self._next_tag_id = first_tag_id
        self.failed = False
        self.condition_count = 0

        if self.config.verify_checksums and self.checksum_function is None:
            from pghexedit.checksum import pg_checksum_page
            self.checksum_function = pg_checksum_page

    @property
    def next_tag_id(self) -> int:
        """The number the next emitted tag will get."""
        return self._next_tag_id

    def reserve_tag_id(self) -> int:
        tag_id = self._next_tag_id
        self._next_tag_id += 1
        return tag_id

    def report(self, condition: Condition) -> Condition:
        """Record a non-fatal condition; it only affects the final exit status."""
        logger.warning("%s", condition)
        self.condition_count += 1
        self.failed = True
        return condition

    @property
    def exit_status(self) -> int:
        return 1 if self.failed else 0
