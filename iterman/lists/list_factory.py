"""Factory for creating the appropriate list for a given source."""

import logging
from pathlib import Path
from typing import Any, Union

from ..core.errors import ConfigurationError, SourceFaultError
from .base import IterableList
from .buffer_list import BufferList
from .directory_loader import load_directory
from .memory_list import MemoryList

logger = logging.getLogger(__name__)


class ListFactory:
    """Factory for creating lists based on the kind of source."""

    @staticmethod
    def create_list(
        source: Union[list, tuple, str, Path, Any],
        round_robin: bool = False,
        encoding: str = "utf-8",
    ) -> IterableList:
        """Create a list for ``source``.

        Args:
            source: A list or tuple of items, a path to a file or directory,
                or a readable stream
            round_robin: Whether the list cycles
            encoding: Codec used for file and stream contents

        Returns:
            MemoryList for sequences and directories, BufferList for files and
            streams

        Raises:
            SourceFaultError: If a path does not exist
            ConfigurationError: If the source kind is not supported
        """
        if isinstance(source, (list, tuple)):
            return MemoryList(source, round_robin=round_robin)

        if isinstance(source, (str, Path)):
            path = Path(source)
            if path.is_dir():
                logger.debug(f"Using directory loader for {path}")
                return load_directory(path, round_robin=round_robin, encoding=encoding)
            if path.is_file():
                logger.debug(f"Using BufferList for {path}")
                return BufferList.from_path(
                    path, round_robin=round_robin, encoding=encoding
                )
            raise SourceFaultError(f"Source not found: {path}", {"path": str(path)})

        if callable(getattr(source, "readline", None)):
            return BufferList(source, round_robin=round_robin, encoding=encoding)

        raise ConfigurationError(
            f"Unsupported list source: {type(source).__name__}",
            {"source_type": type(source).__name__},
        )
