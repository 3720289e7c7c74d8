import pytest

from pghexedit.config import RunConfig
from pghexedit.core.exceptions import OptionError


class TestRunConfig:
    """Tests for run option validation."""

    def test_defaults(self):
        """Test the default run options."""
        config = RunConfig()
        assert not config.verify_checksums
        assert not config.skip_leaf_pages
        assert config.segment_size == 131072 * 8192
        assert config.segment_number == 0
        assert not config.has_block_range

    def test_start_without_end_is_single_block(self):
        """Test that a start without an end selects one block."""
        config = RunConfig(block_start=4)
        assert config.block_end == 4
        assert config.has_block_range

    def test_end_before_start(self):
        """Test that an end below the start raises OptionError."""
        with pytest.raises(OptionError, match="greater than end"):
            RunConfig(block_start=5, block_end=2)

    def test_end_without_start(self):
        """Test that an end without a start raises OptionError."""
        with pytest.raises(OptionError, match="without a range start"):
            RunConfig(block_end=2)

    def test_segment_size_must_be_positive(self):
        """Test that a zero segment size raises OptionError."""
        with pytest.raises(OptionError, match="segment size"):
            RunConfig(segment_size=0)

    def test_negative_segment_number(self):
        """Test that a negative segment number raises OptionError."""
        with pytest.raises(OptionError, match="segment number"):
            RunConfig(segment_number=-1)
