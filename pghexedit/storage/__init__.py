"""
On-disk page layout: constants, flag bits, addressing, and parsers for the
structures found on a page. Nothing here emits tags.
"""
