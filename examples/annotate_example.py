#!/usr/bin/env python3
"""
Page Annotation Example for pghexedit

This example walks through what the annotator produces for a few
hand-built PostgreSQL pages:
- A heap page with three rows, one of them with a null bitmap
- A B-Tree root leaf page with index tuples and its special section
- A B-Tree meta page
- Leaf page elision and checksum verification
- The wxHexEditor tag file written for a small relation file

Run with: python examples/annotate_example.py
"""

import io
import os
import struct
import sys
import tempfile

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from pghexedit import Block, DecodeSession, PageDecoder, RunConfig
from pghexedit.checksum import pg_checksum_page
from pghexedit.runner import HexEditRunner
from pghexedit.storage.flags import BTreePageFlag, InfomaskFlag

PAGE_SIZE = 8192

# Initialize Rich console
console = Console()


def print_header(title: str, subtitle: str = ""):
    """Print a header panel"""
    if subtitle:
        full_title = f"[bold blue]{title}[/bold blue]\n[dim]{subtitle}[/dim]"
    else:
        full_title = f"[bold blue]{title}[/bold blue]"

    console.print(Panel(full_title, style="bright_blue", box=box.DOUBLE, padding=(1, 2)))


def print_step(step_num: int, title: str, description: str = ""):
    step_text = f"[bold yellow]Step {step_num}: {title}[/bold yellow]"
    if description:
        step_text += f"\n[dim italic]{description}[/dim italic]"
    console.print(step_text)
    console.print()


def print_success(message: str):
    console.print(f"[bold green]✓[/bold green] {message}")


def print_info(message: str):
    console.print(f"[bold cyan]ℹ[/bold cyan] {message}")


def print_warning(message: str):
    console.print(f"[bold yellow]⚠[/bold yellow] {message}")


def build_page(items, special: bytes = b"", meta: bytes = b"", checksum: int = 0) -> bytes:
    """
    Lay out a page: header, item pointers, items packed downwards from the
    special section, and the special section itself.
    """
    page = bytearray(PAGE_SIZE)
    special_offset = PAGE_SIZE - len(special)
    page[special_offset:] = special

    upper = special_offset
    pointers = []
    for data in items:
        upper = (upper - len(data)) & ~7
        page[upper:upper + len(data)] = data
        pointers.append(upper | (1 << 15) | (len(data) << 17))

    lower = 24 + 4 * len(pointers)
    struct.pack_into("<IIHHHHHHI", page, 0, 0, 0x0163A0E8, checksum, 0,
                     lower, upper, special_offset, PAGE_SIZE | 4, 0)
    for slot, word in enumerate(pointers):
        struct.pack_into("<I", page, 24 + 4 * slot, word)
    if meta:
        page[24:24 + len(meta)] = meta
    return bytes(page)


def heap_tuple(payload: bytes, infomask: int = 0, natts: int = 1,
               hoff: int = 24, bits: bytes = b"") -> bytes:
    header = struct.pack("<IIIHHHHHB", 731, 0, 0, 0, 0, 1, natts, infomask, hoff)
    return header + bits + bytes(hoff - 23 - len(bits)) + payload


def index_tuple(key: bytes, heap_block: int = 0, heap_offset: int = 1) -> bytes:
    return struct.pack("<HHHH", 0, heap_block, heap_offset, 8 + len(key)) + key


def btree_opaque(flags: int, level: int = 0) -> bytes:
    return struct.pack("<IIIHH", 0, 0, level, flags, 0)


def heap_page() -> bytes:
    committed = InfomaskFlag.HEAP_XMIN_COMMITTED | InfomaskFlag.HEAP_XMAX_INVALID
    return build_page([
        heap_tuple(b"alice\x00\x00\x00", committed),
        heap_tuple(b"bob\x00", committed | InfomaskFlag.HEAP_HASNULL, natts=3, bits=b"\x05"),
        heap_tuple(b"carol\x00\x00\x00", InfomaskFlag.HEAP_XMAX_INVALID),
    ])


def btree_leaf_page() -> bytes:
    leaf_root = BTreePageFlag.BTP_LEAF | BTreePageFlag.BTP_ROOT
    return build_page([
        index_tuple(struct.pack("<q", 1), heap_offset=1),
        index_tuple(struct.pack("<q", 2), heap_offset=2),
        index_tuple(b""),
    ], special=btree_opaque(leaf_root))


def btree_meta_page() -> bytes:
    meta = struct.pack("<6I", 0x053162, 3, 1, 0, 1, 0)
    return build_page([], special=btree_opaque(BTreePageFlag.BTP_META), meta=meta)


def annotation_table(title: str, result, limit: int = None) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Id", style="dim", justify="right")
    table.add_column("Start", style="green", justify="right")
    table.add_column("End", style="green", justify="right")
    table.add_column("Colour", no_wrap=True)
    table.add_column("Label", style="white")

    annotations = result.annotations if limit is None else result.annotations[:limit]
    for annotation in annotations:
        colour = annotation.color.value
        table.add_row(str(annotation.tag_id), str(annotation.start), str(annotation.end),
                      f"[on {colour}]  [/] {annotation.color.name}", annotation.label)
    return table


def demonstrate_heap_page(session: DecodeSession):
    print_step(1, "Decoding a heap page",
               "Header fields, item pointers, then each row's header and contents")
    result = PageDecoder(session).decode_block(Block(heap_page(), 0, PAGE_SIZE))
    console.print(annotation_table("Heap page (block 0)", result))
    print_success(f"{len(result.annotations)} tags, special section: {result.special.kind.value}")
    console.print()


def demonstrate_btree_page(session: DecodeSession):
    print_step(2, "Decoding a B-Tree root leaf page",
               "Page-level labels carry the tree level read from the special section")
    result = PageDecoder(session).decode_block(Block(btree_leaf_page(), 1, PAGE_SIZE))
    console.print(annotation_table("B-Tree leaf (block 1)", result))
    print_info("The third index tuple is a minus-infinity item: no contents tag")
    console.print()


def demonstrate_meta_page(session: DecodeSession):
    print_step(3, "Decoding a B-Tree meta page",
               "The meta struct is tagged where the item directory would be")
    result = PageDecoder(session).decode_block(Block(btree_meta_page(), 2, PAGE_SIZE))
    console.print(annotation_table("B-Tree meta page (block 2)", result))
    print_info(f"Root is block {result.meta.root} at level {result.meta.level}")
    console.print()


def demonstrate_leaf_elision():
    print_step(4, "Skipping leaf pages",
               "With skip_leaf_pages a non-root leaf becomes a single tag; roots never do")
    session = DecodeSession(PAGE_SIZE, RunConfig(skip_leaf_pages=True))
    decoder = PageDecoder(session)

    plain_leaf = build_page([index_tuple(b"\x01" * 8)],
                            special=btree_opaque(BTreePageFlag.BTP_LEAF))
    elided = decoder.decode_block(Block(plain_leaf, 0, PAGE_SIZE))
    root = decoder.decode_block(Block(btree_leaf_page(), 1, PAGE_SIZE))

    console.print(annotation_table("Non-root leaf", elided))
    print_info(f"Root leaf still produces {len(root.annotations)} tags")
    console.print()


def demonstrate_checksums():
    print_step(5, "Verifying checksums",
               "A stamped page verifies; flipping one byte produces a reported mismatch")
    page = heap_page()
    good = build_page([heap_tuple(b"alice\x00\x00\x00")], checksum=0)
    good = build_page([heap_tuple(b"alice\x00\x00\x00")], checksum=pg_checksum_page(good, 0))
    bad = bytearray(good)
    bad[-1] ^= 0xFF

    session = DecodeSession(PAGE_SIZE, RunConfig(verify_checksums=True))
    decoder = PageDecoder(session)
    for name, data in (("stamped", good), ("corrupted", bytes(bad)), ("unstamped", page)):
        result = decoder.decode_block(Block(data, 0, PAGE_SIZE))
        if result.conditions:
            print_warning(f"{name}: {result.conditions[0].message}")
        else:
            print_success(f"{name}: checksum ok")
    console.print()


def demonstrate_tag_file():
    print_step(6, "Writing a wxHexEditor tag file",
               "The runner reads a relation file block by block and streams the tags")
    with tempfile.TemporaryDirectory() as directory:
        path = os.path.join(directory, "16384")
        with open(path, "wb") as f:
            f.write(heap_page())

        stream = io.StringIO()
        status = HexEditRunner(path, RunConfig(block_start=0), stream=stream,
                               options=["-R", "0"]).run()

    document = stream.getvalue()
    preview = "\n".join(document.splitlines()[:22])
    console.print(Syntax(preview, "xml", theme="monokai", line_numbers=True))
    print_success(f"Exit status {status}, {document.count('<TAG id=')} tags written")
    console.print()


def main():
    print_header("pghexedit Page Annotation Example",
                 "Labeled byte ranges for PostgreSQL heap and B-Tree pages")

    # One session shared by the first three steps: tag ids keep counting up
    session = DecodeSession(PAGE_SIZE)
    demonstrate_heap_page(session)
    demonstrate_btree_page(session)
    demonstrate_meta_page(session)
    demonstrate_leaf_elision()
    demonstrate_checksums()
    demonstrate_tag_file()

    console.print(Panel(
        f"[bold green]Done[/bold green]\n"
        f"[dim]{session.next_tag_id} tags emitted by the shared session[/dim]",
        box=box.ROUNDED))


if __name__ == "__main__":
    main()
