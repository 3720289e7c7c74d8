import io
from datetime import datetime

from pghexedit.output import WxHexEditorWriter
from pghexedit.output.xml_writer import format_options
from pghexedit.primitives import Annotation
from pghexedit.storage.layout import Color


class TestFormatOptions:
    """Tests for the options comment."""

    def test_no_options(self):
        """Test the options comment when no options were given."""
        assert format_options([]) == "None"

    def test_options_joined(self):
        """Test that options are joined with spaces."""
        assert format_options(["-k", "-R", "1", "2"]) == "-k -R 1 2 "

    def test_truncated_at_fifty_characters(self):
        """Test that the options comment stops at fifty characters."""
        options = ["-" + "x" * 19] * 4
        assert format_options(options) == " ".join(options[:2]) + " "


class TestWxHexEditorWriter:
    """Tests for the tag file document."""

    def setup_method(self):
        self.stream = io.StringIO()
        self.writer = WxHexEditorWriter(self.stream)

    def test_header(self):
        """Test the document header lines."""
        self.writer.write_header("/data/16384", ["-k"], created=datetime(2024, 3, 5, 14, 7, 9))
        lines = self.stream.getvalue().splitlines()
        assert lines[0] == '<?xml version="1.0" encoding="UTF-8"?>'
        assert lines[1] == "<!-- Dump created on: 14:07:09 Tuesday, March 05 2024 -->"
        assert lines[2] == "<!-- Options used: -k  -->"
        assert lines[3] == "<wxHexEditor_XML_TAG>"
        assert lines[4] == '  <filename path="/data/16384">'

    def test_tag(self):
        """Test the XML of one tag."""
        self.writer.write_annotation(Annotation(3, 8192, 8199, "block 1 LSN", Color.YELLOW_LIGHT))
        assert self.stream.getvalue() == (
            '    <TAG id="3">\n'
            "      <start_offset>8192</start_offset>\n"
            "      <end_offset>8199</end_offset>\n"
            "      <tag_text>block 1 LSN</tag_text>\n"
            "      <font_colour>#313739</font_colour>\n"
            "      <note_colour>#E9E850</note_colour>\n"
            "    </TAG>\n")
        assert self.writer.tags_written == 1

    def test_label_escaped(self):
        """Test that labels are XML escaped."""
        self.writer.write_annotation(Annotation(0, 0, 1, "a < b & c", Color.WHITE))
        assert "<tag_text>a &lt; b &amp; c</tag_text>" in self.stream.getvalue()

    def test_double_dash_kept_out_of_comment(self):
        """Test that a double dash never appears inside the comment."""
        self.writer.write_header("f", ["--verbose"])
        assert "<!-- Options used: - -verbose  -->" in self.stream.getvalue()

    def test_footer(self):
        """Test the document footer lines."""
        self.writer.write_footer()
        assert self.stream.getvalue() == "  </filename>\n</wxHexEditor_XML_TAG>\n"
