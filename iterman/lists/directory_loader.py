"""Load a directory of files into a memory list, one item per file."""

import logging
from pathlib import Path
from typing import List, Union

from ..core.errors import source_errors
from .memory_list import MemoryList

logger = logging.getLogger(__name__)


def _regular_files(directory: Path) -> List[Path]:
    """Return the regular files in ``directory`` sorted by file name."""
    with source_errors("list directory", path=str(directory)):
        entries = list(directory.iterdir())
    files = [entry for entry in entries if entry.is_file()]
    return sorted(files, key=lambda entry: entry.name)


def load_directory(
    directory: Union[str, Path], round_robin: bool = False, encoding: str = "utf-8"
) -> MemoryList[str]:
    """Read every regular file in ``directory`` as one item.

    Files are ordered lexicographically by name so that repeated loads of an
    unchanged directory produce the same list on every platform.
    Sub-directories and other non-regular entries are skipped.

    Args:
        directory: Directory to load
        round_robin: Whether the resulting list cycles
        encoding: Codec used to decode file contents

    Returns:
        Memory list holding the contents of each file

    Raises:
        SourceFaultError: If the directory or one of its files cannot be read
        DecodingFaultError: If a file is not valid text in ``encoding``
    """
    directory = Path(directory)
    items = []
    for file_path in _regular_files(directory):
        with source_errors("read file", path=str(file_path)):
            items.append(file_path.read_bytes().decode(encoding))

    logger.info(f"Loaded {len(items)} items from {directory}")
    return MemoryList(items, round_robin=round_robin)
