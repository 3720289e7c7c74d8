"""
Page decoders.

Each decoder tags one kind of structure and hands its findings to the
next one through a PageContext; PageDecoder runs them in page order.
"""

from .context import PageContext, PageResult
from .page_decoder import PageDecoder, ItemFormat, should_elide_leaf, root_overrides_leaf_skip

__all__ = ["PageContext", "PageResult", "PageDecoder", "ItemFormat",
           "should_elide_leaf", "root_overrides_leaf_skip"]
