from datetime import datetime
from typing import Iterable, Optional, TextIO
from xml.sax.saxutils import escape, quoteattr

from pghexedit.primitives import Annotation
from pghexedit.storage.layout import FONT_COLOUR

MAX_OPTIONS_WIDTH = 50


def format_options(options: Iterable[str]) -> str:
    """
    Join the command line options for the document comment.

    At most 50 option characters (plus separating spaces) are shown.
    """
    shown = ""
    for option in options:
        if len(shown) + len(option) > MAX_OPTIONS_WIDTH:
            break
        shown += option + " "
    return shown or "None"


class WxHexEditorWriter:
    """
    Writes annotations as a wxHexEditor tag file.

    Document structure:
    <wxHexEditor_XML_TAG>
      <filename path="...">
        <TAG id="N"> start_offset, end_offset, tag_text, colours </TAG>
        ...
      </filename>
    </wxHexEditor_XML_TAG>
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.tags_written = 0

    def write_header(self, file_name: str, options: Iterable[str] = (),
                     created: Optional[datetime] = None) -> None:
        created = created or datetime.now()
        timestamp = created.strftime("%H:%M:%S %A, %B %d %Y")
        options_text = format_options(options).replace("--", "- -")

        self.stream.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        self.stream.write(f"<!-- Dump created on: {timestamp} -->\n")
        self.stream.write(f"<!-- Options used: {options_text} -->\n")
        self.stream.write("<wxHexEditor_XML_TAG>\n")
        self.stream.write(f"  <filename path={quoteattr(str(file_name))}>\n")

    def write_annotation(self, annotation: Annotation) -> None:
        self.stream.write(f'    <TAG id="{annotation.tag_id}">\n')
        self.stream.write(f"      <start_offset>{annotation.start}</start_offset>\n")
        self.stream.write(f"      <end_offset>{annotation.end}</end_offset>\n")
        self.stream.write(f"      <tag_text>{escape(annotation.label)}</tag_text>\n")
        self.stream.write(f"      <font_colour>{FONT_COLOUR}</font_colour>\n")
        self.stream.write(f"      <note_colour>{annotation.color.value}</note_colour>\n")
        self.stream.write("    </TAG>\n")
        self.tags_written += 1

    def write_annotations(self, annotations: Iterable[Annotation]) -> None:
        for annotation in annotations:
            self.write_annotation(annotation)

    def write_footer(self) -> None:
        self.stream.write("  </filename>\n")
        self.stream.write("</wxHexEditor_XML_TAG>\n")
