import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from pghexedit.config import RunConfig
from pghexedit.core.exceptions import HexEditError
from pghexedit.core.session import ChecksumFunction, DecodeSession
from pghexedit.decoder import PageDecoder
from pghexedit.output import WxHexEditorWriter
from pghexedit.storage.block_reader import (BlockReader, discover_block_size,
                                            segment_number_from_filename)
from pghexedit.storage.exceptions import BlockReadError, StructuralCorruptionError
from pghexedit.utils.log import get_logger

logger = get_logger(__name__)


class HexEditRunner:
    """
    Annotates every requested block of one relation file.

    The runner owns the I/O: it opens the file, discovers the page size from
    block 0, streams each block through a PageDecoder, and writes the tags
    as they are produced. A fatal decoding error stops the loop after the tags
    already produced for the failing page are written, and the document
    footer is still written so the output stays usable.
    """

    def __init__(self,
                 file_path: str,
                 config: Optional[RunConfig] = None,
                 stream: Optional[TextIO] = None,
                 options: Sequence[str] = (),
                 checksum_function: Optional[ChecksumFunction] = None):
        self.file_path = Path(file_path)
        self.config = config or RunConfig()
        self.stream = stream if stream is not None else sys.stdout
        self.options = list(options)
        self.checksum_function = checksum_function
        self.session: Optional[DecodeSession] = None

        if not self.config.segment_number_forced:
            self.config.segment_number = segment_number_from_filename(self.file_path.name)

    def run(self) -> int:
        """
        Returns:
            Process exit status: 0 if nothing was reported, 1 otherwise
        """
        try:
            fp = open(self.file_path, "rb")
        except OSError as e:
            raise BlockReadError(f"Could not open file <{self.file_path}>: {e}")

        with fp:
            writer = WxHexEditorWriter(self.stream)
            writer.write_header(str(self.file_path), self.options)
            try:
                return self._annotate(fp, writer)
            finally:
                writer.write_footer()

    def _annotate(self, fp, writer: WxHexEditorWriter) -> int:
        try:
            page_size = discover_block_size(fp)
        except BlockReadError as e:
            logger.error("%s", e)
            return 1

        self.session = DecodeSession(page_size, self.config, self.checksum_function)
        decoder = PageDecoder(self.session)
        reader = BlockReader(fp, page_size)

        logger.debug("Annotating %s with page size %d", self.file_path, page_size)

        try:
            for block in reader.iter_blocks(self.config.block_start, self.config.block_end):
                result = decoder.decode_block(block)
                writer.write_annotations(result.annotations)
        except StructuralCorruptionError as e:
            writer.write_annotations(e.partial_annotations)
            logger.error("Fatal corruption in block %d: %s", e.block_number, e)
            return 1
        except HexEditError as e:
            logger.error("%s", e)
            return 1

        if reader.premature_eof:
            return 1
        return self.session.exit_status
