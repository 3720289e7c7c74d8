from dataclasses import dataclass

from pghexedit.storage.layout import Color


@dataclass(frozen=True)
class Annotation:
    """
    A labeled byte range of the annotated file.

    Offsets are absolute (relative to the start of the file) and the end
    offset is inclusive, matching what wxHexEditor expects in a tag file.
    """

    """Run-wide tag number, strictly increasing in emission order"""
    tag_id: int

    """First byte covered by the tag"""
    start: int

    """Last byte covered by the tag"""
    end: int

    """Human readable tag text"""
    label: str

    """Note colour of the tag"""
    color: Color

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"Annotation start must be non-negative, got {self.start}")
        if self.end < self.start:
            raise ValueError(
                f"Annotation end {self.end} precedes start {self.start} ({self.label})")

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def without_id(self) -> tuple:
        """Everything but the tag number, for comparing two decodes of one page."""
        return self.start, self.end, self.label, self.color

    def __str__(self) -> str:
        return f"Annotation(#{self.tag_id} [{self.start}, {self.end}] {self.label})"
