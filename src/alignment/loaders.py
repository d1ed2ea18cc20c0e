"""
Alignment Loading Utilities

Alignments are stored one per line in keyed text archives:

    utt1 2 2 4 4 4 7
    utt2 3 5
"""

from pathlib import Path
from typing import Dict, List, Union
import logging

from fst_model import strip_rspecifier

from .base import validate_alignment

logger = logging.getLogger(__name__)


def parse_alignment_line(line: str) -> tuple:
    """
    Parse ``key label label ...`` into (key, labels).

    Raises:
        ValueError: On a non-integer or zero label
    """
    fields = line.split()
    if not fields:
        raise ValueError("Empty alignment line")
    key = fields[0]
    try:
        labels = [int(x) for x in fields[1:]]
    except ValueError as e:
        raise ValueError(f"Non-integer label in alignment '{key}': {e}") from e
    try:
        labels = validate_alignment(labels)
    except ValueError as e:
        raise ValueError(f"Invalid alignment '{key}': {e}") from e
    return key, labels


def read_alignment_archive(file_path: Union[str, Path]) -> Dict[str, List[int]]:
    """
    Load all alignments of a text archive.

    Args:
        file_path: Archive path or rspecifier (``ark,t:ali.txt``)

    Returns:
        Dict mapping key -> list of labels
    """
    file_path = strip_rspecifier(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Alignment archive not found: {file_path}")

    logger.info(f"Loading alignments from: {file_path}")
    alignments = {}
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            key, labels = parse_alignment_line(line)
            if key in alignments:
                logger.warning(f"Duplicate key '{key}' in {file_path}, keeping the last entry")
            alignments[key] = labels

    logger.info(f"Loaded {len(alignments)} alignments")
    return alignments


class AlignmentArchive:
    """
    Random-access reader over a text alignment archive.

    Example:
        >>> archive = AlignmentArchive("ark,t:ali.txt")
        >>> labels = archive["utt1"]
    """

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = strip_rspecifier(file_path)
        self._alignments = read_alignment_archive(self.file_path)

    def keys(self) -> List[str]:
        return list(self._alignments)

    def __contains__(self, key: str) -> bool:
        return key in self._alignments

    def __len__(self) -> int:
        return len(self._alignments)

    def __getitem__(self, key: str) -> List[int]:
        if key not in self._alignments:
            raise KeyError(f"No alignment with key '{key}' has been found in '{self.file_path}'")
        return list(self._alignments[key])
