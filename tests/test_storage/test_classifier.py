import struct

from pghexedit.primitives import Block
from pghexedit.storage.special import (SpecialSectionInfo, SpecialSectionKind,
                                       classify_block, classify_special_section)

PAGE_SIZE = 8192


def page_with(special: int, magic: int = None, page_id: int = None) -> bytes:
    page = bytearray(PAGE_SIZE)
    struct.pack_into("<H", page, 16, special)
    if magic is not None:
        struct.pack_into("<I", page, special, magic)
    if page_id is not None:
        struct.pack_into("<H", page, PAGE_SIZE - 2, page_id)
    return bytes(page)


def classify(page: bytes, available: int = PAGE_SIZE) -> SpecialSectionInfo:
    special = struct.unpack_from("<H", page, 16)[0]
    return classify_special_section(special, PAGE_SIZE, available,
                                    page if available == PAGE_SIZE else None)


class TestClassifierErrors:
    """Tests for the boundary checks that run before any content check."""

    def test_unreadable_header_is_unknown(self):
        """Test that an unreadable pd_special gives an unknown error."""
        info = classify_special_section(None, PAGE_SIZE, 16)
        assert info.kind == SpecialSectionKind.ERROR_UNKNOWN

    def test_available_at_header_struct_size_is_unknown(self):
        """Test that reading only the header struct gives an unknown error."""
        info = classify_special_section(8176, PAGE_SIZE, 28)
        assert info.kind == SpecialSectionKind.ERROR_UNKNOWN

    def test_zero_special_is_boundary_error(self):
        """Test that pd_special of zero is a boundary error."""
        assert classify(page_with(0)).kind == SpecialSectionKind.ERROR_BOUNDARY

    def test_special_past_page_is_boundary_error(self):
        """Test that pd_special past the page size is a boundary error."""
        info = classify_special_section(9000, PAGE_SIZE, PAGE_SIZE, bytes(PAGE_SIZE))
        assert info.kind == SpecialSectionKind.ERROR_BOUNDARY
        assert info.offset == 9000

    def test_special_past_available_is_boundary_error(self):
        """Test that pd_special past the bytes read is a boundary error."""
        info = classify_special_section(8176, PAGE_SIZE, 4096)
        assert info.kind == SpecialSectionKind.ERROR_BOUNDARY

    def test_boundary_error_wins_over_btree_signature(self):
        """Test that boundary checks run before signature checks."""
        info = classify_special_section(0, PAGE_SIZE, PAGE_SIZE, page_with(0, page_id=0))
        assert info.kind == SpecialSectionKind.ERROR_BOUNDARY


class TestClassifierFamilies:
    """Tests for the size and signature rules."""

    def test_no_special_section(self):
        """Test that pd_special at the page end means no special section."""
        info = classify(page_with(PAGE_SIZE))
        assert info == SpecialSectionInfo(SpecialSectionKind.NONE, PAGE_SIZE, 0)

    def test_no_special_section_needs_no_page_bytes(self):
        """Test that the empty section is classified without page contents."""
        info = classify_special_section(PAGE_SIZE, PAGE_SIZE, PAGE_SIZE)
        assert info.kind == SpecialSectionKind.NONE

    def test_sequence_magic(self):
        """Test that the sequence magic number is recognized."""
        info = classify(page_with(8184, magic=0x1717))
        assert info.kind == SpecialSectionKind.SEQUENCE
        assert info.size == 8

    def test_sequence_magic_checked_before_spgist_page_id(self):
        """Test that the sequence magic wins over the SP-GiST page id."""
        info = classify(page_with(8184, magic=0x1717, page_id=0xFF82))
        assert info.kind == SpecialSectionKind.SEQUENCE

    def test_spgist_page_id_without_magic(self):
        """Test that the SP-GiST page id is recognized."""
        assert classify(page_with(8184, page_id=0xFF82)).kind == SpecialSectionKind.SPGIST

    def test_other_size_eight_is_gin(self):
        """Test that any other 8-byte section is GIN."""
        assert classify(page_with(8184, page_id=0x1234)).kind == SpecialSectionKind.GIN

    def test_size_eight_on_partial_page_is_unknown(self):
        """Test that an 8-byte section on a partial page is unknown."""
        info = classify_special_section(8184, PAGE_SIZE, 8188)
        assert info.kind == SpecialSectionKind.ERROR_UNKNOWN

    def test_btree_cycle_id(self):
        """Test that a 16-byte section with a cycle id is B-Tree."""
        info = classify(page_with(8176, page_id=0))
        assert info.kind == SpecialSectionKind.BTREE
        assert info.offset == 8176
        assert info.size == 16

    def test_btree_max_cycle_id(self):
        """Test that the largest cycle id still means B-Tree."""
        assert classify(page_with(8176, page_id=0xFF7F)).kind == SpecialSectionKind.BTREE

    def test_hash_page_id(self):
        """Test that the hash page id is recognized."""
        assert classify(page_with(8176, page_id=0xFF80)).kind == SpecialSectionKind.HASH

    def test_gist_page_id(self):
        """Test that the GiST page id is recognized."""
        assert classify(page_with(8176, page_id=0xFF81)).kind == SpecialSectionKind.GIST

    def test_unrecognized_page_id(self):
        """Test that an unknown page id gives an unknown error."""
        assert classify(page_with(8176, page_id=0xFF90)).kind == SpecialSectionKind.ERROR_UNKNOWN

    def test_size_sixteen_on_partial_page_is_unknown(self):
        """Test that a 16-byte section on a partial page is unknown."""
        info = classify_special_section(8176, PAGE_SIZE, 8180)
        assert info.kind == SpecialSectionKind.ERROR_UNKNOWN

    def test_unusual_size_is_unknown(self):
        """Test that a section of no known size is unknown."""
        assert classify(page_with(8168, page_id=0)).kind == SpecialSectionKind.ERROR_UNKNOWN

    def test_deterministic(self):
        """Test that classifying the same page twice gives the same result."""
        page = page_with(8176, page_id=0xFF80)
        assert classify(page) == classify(page)

    def test_kind_properties(self):
        """Test the is_error and is_index helpers."""
        assert SpecialSectionKind.ERROR_BOUNDARY.is_error
        assert not SpecialSectionKind.BTREE.is_error
        assert SpecialSectionKind.GIN.is_index
        assert not SpecialSectionKind.SEQUENCE.is_index


class TestClassifyBlock:
    """Tests for classifying blocks read from disk."""

    def test_full_block(self):
        """Test classifying a complete block."""
        block = Block(page_with(8176, page_id=0), 0, PAGE_SIZE)
        assert classify_block(block).kind == SpecialSectionKind.BTREE

    def test_block_too_short_for_special_field(self):
        """Test that a block without pd_special is unknown."""
        block = Block(bytes(16), 0, PAGE_SIZE)
        assert classify_block(block).kind == SpecialSectionKind.ERROR_UNKNOWN

    def test_partial_block_never_checks_page_id(self):
        """Test that a partial block never has its page id inspected."""
        block = Block(page_with(8176, page_id=0)[:8180], 0, PAGE_SIZE)
        assert classify_block(block).kind == SpecialSectionKind.ERROR_UNKNOWN
