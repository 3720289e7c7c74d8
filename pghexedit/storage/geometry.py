"""
Block addressing.

Two address spaces must never be mixed up:

- display offsets are relative to the start of the file being annotated
  (``page_size * block_number``), since that is what the hex editor shows;
- checksums are seeded with the block number relative to the whole relation,
  so a block in segment file N is shifted by the number of blocks held in
  each preceding segment.
"""


def block_offset(block_number: int, page_size: int) -> int:
    """
    Return the absolute byte offset of a block within the annotated file.

    Every tag emitted for the block is based at this offset.
    """
    if block_number < 0:
        raise ValueError(f"Block number must be non-negative, got {block_number}")
    if page_size <= 0:
        raise ValueError(f"Page size must be positive, got {page_size}")
    return page_size * block_number


def checksum_block_number(block_number: int,
                          page_size: int,
                          segment_size: int,
                          segment_number: int) -> int:
    """
    Return the relation-wide block number used to seed a page checksum.

    Args:
        block_number: Block number within the segment file
        page_size: Size of each page in bytes
        segment_size: Size of a full segment file in bytes
        segment_number: Number of the segment file (0 for the first)
    """
    if page_size <= 0:
        raise ValueError(f"Page size must be positive, got {page_size}")
    delta = (segment_size // page_size) * segment_number
    return delta + block_number
