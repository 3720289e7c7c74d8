from typing import Optional

from pghexedit.core.exceptions import AnnotationOrderError
from pghexedit.core.session import DecodeSession
from pghexedit.primitives import Annotation
from pghexedit.storage.layout import Color


class PageEmitter:
    """
    Creates the tags of a single page.

    Decoders pass offsets relative to the start of the page and the emitter
    turns them into absolute file offsets. Tag numbers come from the session
    counter. wxHexEditor requires tags in ascending offset order, so a tag
    that starts before the previous one raises AnnotationOrderError.
    """

    def __init__(self,
                 session: DecodeSession,
                 block_number: int,
                 base_offset: int,
                 level: Optional[int] = None):
        self.session = session
        self.block_number = block_number
        self.base_offset = base_offset
        self.level = level
        self.annotations: list[Annotation] = []
        self._last_start: Optional[int] = None

    def page_tag(self, name: str, color: Color, start: int, end: int) -> Annotation:
        """Tag a page-level structure (header field, special section field)."""
        if self.level is not None:
            label = f"block {self.block_number} (level {self.level}) {name}"
        else:
            label = f"block {self.block_number} {name}"
        return self._emit(start, end, label, color)

    def page_field(self, name: str, color: Color, offset: int, size: int) -> Annotation:
        return self.page_tag(name, color, offset, offset + size - 1)

    def tuple_tag(self, slot: int, name: str, color: Color, start: int, end: int) -> Annotation:
        """Tag part of an item, labeled with its (block, slot) address."""
        label = f"({self.block_number},{slot}) {name}"
        return self._emit(start, end, label, color)

    def tuple_field(self, slot: int, name: str, color: Color, offset: int, size: int) -> Annotation:
        return self.tuple_tag(slot, name, color, offset, offset + size - 1)

    def _emit(self, start: int, end: int, label: str, color: Color) -> Annotation:
        absolute_start = self.base_offset + start
        absolute_end = self.base_offset + end

        if self._last_start is not None and absolute_start < self._last_start:
            raise AnnotationOrderError(
                f"Tag '{label}' starts at {absolute_start}, before the previous "
                f"tag at {self._last_start}",
                block_number=self.block_number,
                previous_start=self._last_start,
                start=absolute_start)
        if absolute_end < absolute_start:
            raise ValueError(
                f"Tag '{label}' ends at {absolute_end}, before its start {absolute_start}")

        annotation = Annotation(tag_id=self.session.reserve_tag_id(),
                                start=absolute_start,
                                end=absolute_end,
                                label=label,
                                color=color)
        self._last_start = absolute_start
        self.annotations.append(annotation)
        return annotation
