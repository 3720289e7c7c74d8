"""
PostgreSQL data page checksums.

The algorithm runs 32 parallel FNV-1a-like sums over the page viewed as
rows of 32 little-endian uint32 words, mixes in two rounds of zeros, and
folds the sums together with XOR. The pd_checksum field is treated as zero
during the computation and the block number is XORed in at the end so that
a page copied to the wrong place fails verification.
"""

import struct

from pghexedit.storage.layout import PageLayout

N_SUMS = 32
FNV_PRIME = 16777619
UINT32_MASK = 0xFFFFFFFF

CHECKSUM_BASE_OFFSETS = (
    0x5B1F36E9, 0xB8525960, 0x02AB50AA, 0x1DE66D2A,
    0x79FF467A, 0x9BB9F8A3, 0x217E7CD2, 0x83E13D2C,
    0xF8D4474F, 0xE39EB970, 0x42C6AE16, 0x993216FA,
    0x7B093B5D, 0x98DAFF3C, 0xF718902A, 0x0B1C9CDB,
    0xE58F764B, 0x187636BC, 0x5D7B3BB1, 0xE73DE7DE,
    0x92BEC979, 0xCCA6C0B2, 0x304A0979, 0x85AA43D4,
    0x783125BB, 0x6CA8EAA2, 0xE407EAC6, 0x4B5CFC3E,
    0x9FBF8C76, 0x15CA20BE, 0xF2CA9FFF, 0x3ED17D64,
)


def _checksum_comp(checksum: int, value: int) -> int:
    tmp = checksum ^ value
    return ((tmp * FNV_PRIME) & UINT32_MASK) ^ (tmp >> 17)


def pg_checksum_block(data: bytes) -> int:
    """
    Compute the 32-bit block checksum of data.

    Raises:
        ValueError: If len(data) is not a multiple of the 128-byte row size
    """
    row_size = N_SUMS * 4
    if len(data) % row_size:
        raise ValueError(f"Block length {len(data)} is not a multiple of {row_size}")

    sums = list(CHECKSUM_BASE_OFFSETS)
    words = struct.unpack(f"<{len(data) // 4}I", data)

    for row in range(0, len(words), N_SUMS):
        for j in range(N_SUMS):
            sums[j] = _checksum_comp(sums[j], words[row + j])

    # two rounds of zeroes for additional mixing
    for _ in range(2):
        for j in range(N_SUMS):
            sums[j] = _checksum_comp(sums[j], 0)

    result = 0
    for value in sums:
        result ^= value
    return result


def pg_checksum_page(page: bytes, block_number: int) -> int:
    """
    Compute the 16-bit checksum PostgreSQL stores in pd_checksum.

    Args:
        page: Full page contents
        block_number: Relation-wide block number of the page

    Returns:
        Checksum in the range 1..65535 (0 is never produced)
    """
    data = bytearray(page)
    struct.pack_into("<H", data, PageLayout.PD_CHECKSUM, 0)

    checksum = pg_checksum_block(bytes(data))
    checksum ^= block_number & UINT32_MASK

    return (checksum % 65535) + 1
