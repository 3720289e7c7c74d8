import os
import re
from typing import BinaryIO, Iterator, Optional

from pghexedit.primitives import Block
from pghexedit.storage.exceptions import BlockReadError
from pghexedit.storage.layout import PageLayout
from pghexedit.utils.log import get_logger

logger = get_logger(__name__)

_SEGMENT_SUFFIX = re.compile(r"\.(\d+)$")


def segment_number_from_filename(file_name: str) -> int:
    """
    Determine the segment number from a segment file name.

    For instance /path/to/16384.7 gives 7. Names without a numeric
    suffix (the first segment) give 0.
    """
    match = _SEGMENT_SUFFIX.search(os.fspath(file_name))
    if match is None:
        return 0
    return int(match.group(1))


def discover_block_size(fp: BinaryIO) -> int:
    """
    Read the page header of block 0 to determine the block size of the file.

    The file position is restored to the start afterwards.

    Raises:
        BlockReadError: If block 0 has no complete page header or declares
            a zero page size
    """
    fp.seek(0)
    header = fp.read(PageLayout.PAGE_HEADER_STRUCT_SIZE)
    fp.seek(0)

    if len(header) != PageLayout.PAGE_HEADER_STRUCT_SIZE:
        raise BlockReadError(
            f"Unable to read full page header from block 0. Read {len(header)} bytes")

    pagesize_version = int.from_bytes(
        header[PageLayout.PD_PAGESIZE_VERSION:PageLayout.PD_PAGESIZE_VERSION + 2], "little")
    block_size = pagesize_version & PageLayout.PAGE_SIZE_MASK
    if block_size == 0:
        raise BlockReadError("Block 0 declares a page size of 0")
    return block_size


class BlockReader:
    """
    Reads consecutive blocks of a relation file.

    The last block of a file may come back short; it is still handed out
    so that the decoders can report the truncation.
    """

    def __init__(self, fp: BinaryIO, block_size: int):
        if block_size <= 0:
            raise ValueError(f"Block size must be positive, got {block_size}")
        self.fp = fp
        self.block_size = block_size
        self.blocks_read = 0
        self.premature_eof = False

    def iter_blocks(self, start: Optional[int] = None, end: Optional[int] = None) -> Iterator[Block]:
        """
        Yield blocks from start (default 0) through end (default: end of file).

        Raises:
            BlockReadError: If seeking to the start block fails
        """
        current = 0
        if start is not None:
            try:
                self.fp.seek(self.block_size * start)
            except (OSError, ValueError) as e:
                raise BlockReadError(
                    f"Seek error encountered before requested start block <{start}>: {e}")
            current = start

        initial_read = True
        while end is None or current <= end:
            try:
                data = self.fp.read(self.block_size)
            except OSError as e:
                raise BlockReadError(f"Failed to read block {current}: {e}")

            if not data:
                # Seeking past the end is not an error until the next read
                if initial_read:
                    self.premature_eof = True
                    logger.error("Premature end of file encountered")
                return

            self.blocks_read += 1
            yield Block(data, current, self.block_size)

            initial_read = False
            current += 1
