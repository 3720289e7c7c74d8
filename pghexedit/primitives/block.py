import struct


class Block:
    """
    One page-sized buffer read from a relation file.

    A Block may hold fewer bytes than the page size when the final read of a
    file came up short. Every accessor refuses to read past the bytes that
    are actually present, so a partial page is never decoded from garbage.
    """

    def __init__(self, data: bytes, block_number: int, page_size: int):
        if block_number < 0:
            raise ValueError(
                f"Block number must be non-negative, got {block_number}")
        if len(data) > page_size:
            raise ValueError(
                f"Block data too large: {len(data)} > {page_size}")

        self.data = bytes(data)
        self.block_number = block_number
        self.page_size = page_size

    @property
    def available(self) -> int:
        """Number of bytes actually read for this block."""
        return len(self.data)

    @property
    def is_complete(self) -> bool:
        return self.available == self.page_size

    def has_bytes(self, offset: int, length: int) -> bool:
        """Check whether [offset, offset + length) was read."""
        return offset >= 0 and length >= 0 and offset + length <= self.available

    def read_uint8(self, offset: int) -> int:
        return self._unpack("<B", offset)

    def read_uint16(self, offset: int) -> int:
        return self._unpack("<H", offset)

    def read_uint32(self, offset: int) -> int:
        return self._unpack("<I", offset)

    def _unpack(self, fmt: str, offset: int) -> int:
        size = struct.calcsize(fmt)
        if not self.has_bytes(offset, size):
            raise IndexError(
                f"Read of {size} bytes at offset {offset} is past the "
                f"{self.available} bytes available in block {self.block_number}")
        return struct.unpack_from(fmt, self.data, offset)[0]

    def __len__(self) -> int:
        return self.available

    def __str__(self) -> str:
        return (f"Block(number={self.block_number}, "
                f"available={self.available}/{self.page_size})")

    def __repr__(self) -> str:
        return self.__str__()
