from .classifier import (SpecialSectionKind, SpecialSectionInfo,
                         classify_special_section, classify_block)
from .btree import BTreeOpaque, BTreeMetaData, read_btree_opaque, is_btree_meta_page

__all__ = ["SpecialSectionKind", "SpecialSectionInfo", "classify_special_section",
           "classify_block", "BTreeOpaque", "BTreeMetaData", "read_btree_opaque",
           "is_btree_meta_page"]
