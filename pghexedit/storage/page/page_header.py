from dataclasses import dataclass

from pghexedit.primitives import Block
from pghexedit.storage.layout import PageLayout


@dataclass(frozen=True)
class PageHeader:
    """
    The fixed 24-byte PageHeaderData at the start of every page.

    Parsing requires only the fixed part; the item directory that follows
    is read separately since it may be cut short on a partial page.
    """
    lsn_xlogid: int
    lsn_xrecoff: int
    checksum: int
    flags: int
    lower: int
    upper: int
    special: int
    pagesize_version: int
    prune_xid: int

    @classmethod
    def parse(cls, block: Block) -> 'PageHeader':
        """
        Read the header fields of a block.

        Raises:
            ValueError: If fewer than SIZE_OF_PAGE_HEADER bytes were read
        """
        if not block.has_bytes(0, PageLayout.SIZE_OF_PAGE_HEADER):
            raise ValueError(
                f"Page header needs {PageLayout.SIZE_OF_PAGE_HEADER} bytes, "
                f"only {block.available} available")

        return cls(
            lsn_xlogid=block.read_uint32(PageLayout.PD_LSN),
            lsn_xrecoff=block.read_uint32(PageLayout.PD_LSN + 4),
            checksum=block.read_uint16(PageLayout.PD_CHECKSUM),
            flags=block.read_uint16(PageLayout.PD_FLAGS),
            lower=block.read_uint16(PageLayout.PD_LOWER),
            upper=block.read_uint16(PageLayout.PD_UPPER),
            special=block.read_uint16(PageLayout.PD_SPECIAL),
            pagesize_version=block.read_uint16(PageLayout.PD_PAGESIZE_VERSION),
            prune_xid=block.read_uint32(PageLayout.PD_PRUNE_XID),
        )

    @property
    def page_size(self) -> int:
        return self.pagesize_version & PageLayout.PAGE_SIZE_MASK

    @property
    def layout_version(self) -> int:
        return self.pagesize_version & PageLayout.LAYOUT_VERSION_MASK

    @property
    def max_offset_number(self) -> int:
        """Number of item pointers in the directory."""
        if self.lower <= PageLayout.SIZE_OF_PAGE_HEADER:
            return 0
        return (self.lower - PageLayout.SIZE_OF_PAGE_HEADER) // PageLayout.ITEM_ID_SIZE

    @property
    def directory_remainder(self) -> int:
        """Bytes of pd_lower that do not make up a whole item pointer."""
        if self.lower <= PageLayout.SIZE_OF_PAGE_HEADER:
            return 0
        return (self.lower - PageLayout.SIZE_OF_PAGE_HEADER) % PageLayout.ITEM_ID_SIZE

    @property
    def directory_end(self) -> int:
        """Page offset just past the last item pointer."""
        return PageLayout.SIZE_OF_PAGE_HEADER + self.max_offset_number * PageLayout.ITEM_ID_SIZE

    def problems(self, page_size: int) -> list[str]:
        """
        Check the header fields against each other and the page size.

        Returns:
            List of problem descriptions (empty if the header looks sane)
        """
        problems = []
        if self.max_offset_number > page_size:
            problems.append(f"item count {self.max_offset_number} exceeds page size {page_size}")
        if self.directory_remainder:
            problems.append(
                f"pd_lower {self.lower} leaves {self.directory_remainder} bytes "
                f"that are not a whole item pointer")
        if self.layout_version != PageLayout.PG_PAGE_LAYOUT_VERSION:
            problems.append(
                f"layout version {self.layout_version} is not "
                f"{PageLayout.PG_PAGE_LAYOUT_VERSION}")
        if self.upper > page_size:
            problems.append(f"pd_upper {self.upper} exceeds page size {page_size}")
        if self.upper > self.special:
            problems.append(f"pd_upper {self.upper} exceeds pd_special {self.special}")
        if self.lower < PageLayout.PAGE_HEADER_STRUCT_SIZE - PageLayout.ITEM_ID_SIZE:
            problems.append(f"pd_lower {self.lower} is inside the page header")
        if self.lower > page_size:
            problems.append(f"pd_lower {self.lower} exceeds page size {page_size}")
        if self.upper < self.lower:
            problems.append(f"pd_upper {self.upper} is below pd_lower {self.lower}")
        if self.special > page_size:
            problems.append(f"pd_special {self.special} exceeds page size {page_size}")
        return problems
