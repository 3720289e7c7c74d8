import pytest

from pghexedit.storage.geometry import block_offset, checksum_block_number

SEGMENT_SIZE = 131072 * 8192


class TestBlockOffset:
    """Tests for display offsets."""

    def test_first_block_starts_at_zero(self):
        """Test that block 0 is displayed from file offset 0."""
        assert block_offset(0, 8192) == 0

    def test_offset_is_page_size_times_block(self):
        """Test that the display offset is the block number times the page size."""
        assert block_offset(3, 8192) == 24576
        assert block_offset(7, 4096) == 28672

    def test_negative_block_rejected(self):
        """Test that a negative block number raises ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            block_offset(-1, 8192)

    def test_zero_page_size_rejected(self):
        """Test that a zero page size raises ValueError."""
        with pytest.raises(ValueError, match="positive"):
            block_offset(1, 0)


class TestChecksumBlockNumber:
    """Tests for the relation-wide block number used by checksums."""

    def test_first_segment_is_unchanged(self):
        """Test that blocks of segment 0 keep their number."""
        assert checksum_block_number(5, 8192, SEGMENT_SIZE, 0) == 5

    def test_later_segments_shift_by_blocks_per_segment(self):
        """Test that later segments add the blocks of every earlier segment."""
        assert checksum_block_number(5, 8192, SEGMENT_SIZE, 2) == 2 * 131072 + 5

    def test_custom_segment_size(self):
        """Test the shift with a non-default segment size."""
        assert checksum_block_number(1, 8192, 8192 * 10, 3) == 31

    def test_display_offset_ignores_segment(self):
        """The segment delta never leaks into display offsets."""
        blkno = checksum_block_number(2, 8192, SEGMENT_SIZE, 4)
        assert blkno != 2
        assert block_offset(2, 8192) == 16384
