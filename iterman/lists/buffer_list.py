"""List backed by a line-delimited stream that is read incrementally."""

import io
import logging
import os
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from ..core.errors import ConfigurationError, OutOfBoundsError, source_errors
from .base import EXHAUSTED, IterableList, IterationPolicy

logger = logging.getLogger(__name__)


def _is_rewindable(source) -> bool:
    seekable = getattr(source, "seekable", None)
    if seekable is not None:
        try:
            return bool(seekable())
        except (OSError, ValueError):
            return False
    return callable(getattr(source, "seek", None))


class BufferList(IterableList[str]):
    """Iterate over the lines of a stream, one line per pull.

    The source is normally a binary stream (a file opened in ``"rb"`` mode or
    ``io.BytesIO``); lines are decoded with ``encoding``. Text streams are
    accepted too. Round-robin rewinds the source to offset 0 at the end, so
    it requires a seekable source.
    """

    def __init__(
        self,
        source: Union[BinaryIO, io.TextIOBase],
        round_robin: bool = False,
        encoding: str = "utf-8",
        owns_source: bool = False,
    ):
        """Initialize buffer list.

        Args:
            source: Readable stream providing ``readline()``
            round_robin: Whether to rewind to the start at end of data
            encoding: Codec used to decode byte lines
            owns_source: Whether ``close()`` should also close the source

        Raises:
            ConfigurationError: If round-robin is requested on a source that
                cannot be rewound
        """
        if round_robin and not _is_rewindable(source):
            raise ConfigurationError(
                "Round-robin requires a seekable source",
                {"source": repr(source)},
            )

        super().__init__(IterationPolicy.from_flag(round_robin))
        self._source = source
        self.encoding = encoding
        self._owns_source = owns_source
        self._line_index = 0
        self._bytes_offset = 0
        self._exhausted = False
        logger.debug(f"Created BufferList over {source!r} ({self.policy.value})")

    @classmethod
    def new_round_robin(cls, source, encoding: str = "utf-8") -> "BufferList":
        """Create a buffer list with round-robin turned on."""
        return cls(source, round_robin=True, encoding=encoding)

    @classmethod
    def from_path(
        cls,
        file_path: Union[str, Path],
        round_robin: bool = False,
        encoding: str = "utf-8",
    ) -> "BufferList":
        """Open ``file_path`` in binary mode and iterate over its lines.

        The returned list owns the file handle; close it when done.
        """
        file_path = Path(file_path)
        with source_errors("open", path=str(file_path)):
            handle = open(file_path, "rb")
        return cls(handle, round_robin=round_robin, encoding=encoding, owns_source=True)

    @classmethod
    def from_text(
        cls, text: str, round_robin: bool = False, encoding: str = "utf-8"
    ) -> "BufferList":
        """Iterate over the lines of an in-memory string."""
        return cls(
            io.BytesIO(text.encode(encoding)), round_robin=round_robin, encoding=encoding
        )

    def _read_line(self) -> Optional[str]:
        """Read and decode one line, or return None at end of data."""
        with source_errors("readline", line_index=self._line_index):
            raw = self._source.readline()
        if not raw:
            return None

        # The line is consumed from the source even if it fails to decode
        self._line_index += 1
        if isinstance(raw, bytes):
            self._bytes_offset += len(raw)
            with source_errors("decode", line_index=self._line_index):
                line = raw.decode(self.encoding)
        else:
            line = raw
            self._bytes_offset = self._text_position(raw)

        if line.endswith("\r\n"):
            return line[:-2]
        if line.endswith("\n"):
            return line[:-1]
        return line

    def _text_position(self, raw: str) -> int:
        """Position after ``raw`` in a text source, as accepted by its ``seek``.

        Text streams seek by character index (``StringIO``) or opaque cookie
        (``TextIOWrapper``), so the offset comes from ``tell()`` when available.
        """
        tell = getattr(self._source, "tell", None)
        if not callable(tell):
            return self._bytes_offset + len(raw.encode(self.encoding))
        with source_errors("tell", line_index=self._line_index):
            return tell()

    def _rewind(self) -> None:
        with source_errors("rewind"):
            self._source.seek(0)
        self._line_index = 0
        self._bytes_offset = 0

    def pull(self) -> Any:
        if self._exhausted:
            return EXHAUSTED

        line = self._read_line()
        if line is not None:
            return line

        if not self.round_robin:
            self._exhausted = True
            return EXHAUSTED

        logger.debug("End of data reached, rewinding source")
        self._rewind()
        line = self._read_line()
        # An empty source stays empty after a rewind
        return EXHAUSTED if line is None else line

    @property
    def line_index(self) -> int:
        """Number of lines read since the last rewind."""
        return self._line_index

    @property
    def bytes_offset(self) -> int:
        """Position of the next line in the source.

        A byte offset for binary sources; for text sources, the value the
        source's own ``tell()`` reported, which is what its ``seek`` expects.
        """
        return self._bytes_offset

    def reset(self) -> None:
        """Rewind the source to its beginning."""
        self._rewind()
        self._exhausted = False

    def seek(self, line_index: int, bytes_offset: int) -> int:
        """Reposition the source at ``bytes_offset``, recorded as ``line_index``.

        The caller is responsible for ``bytes_offset`` pointing at the start of
        a line; it is usually a value previously read from :attr:`bytes_offset`.

        Returns:
            The new byte offset

        Raises:
            OutOfBoundsError: If the offset lies beyond the end of the stream
                or the stream length cannot be determined
        """
        try:
            stream_len = self._source.seek(0, os.SEEK_END)
        except (AttributeError, OSError, ValueError):
            raise OutOfBoundsError(bytes_offset, 0)

        if bytes_offset < 0 or stream_len < bytes_offset:
            self._source.seek(self._bytes_offset)
            raise OutOfBoundsError(bytes_offset, stream_len)

        with source_errors("seek", bytes_offset=bytes_offset):
            self._source.seek(bytes_offset)

        self._line_index = line_index
        self._bytes_offset = bytes_offset
        self._exhausted = False
        return self._bytes_offset

    def close(self) -> None:
        if self._owns_source:
            self._source.close()

    def __repr__(self) -> str:
        return (
            f"BufferList(line_index={self._line_index}, "
            f"bytes_offset={self._bytes_offset}, policy={self.policy.value})"
        )
