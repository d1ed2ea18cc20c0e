"""
Automaton Loading Utilities

Functions for loading automata from:
- OpenFST text files (one automaton per file)
- Keyed text archives (Kaldi ``ark,t`` style, many automata per file)
"""

from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union
import logging

from .base import Automaton

logger = logging.getLogger(__name__)


def strip_rspecifier(path: Union[str, Path]) -> Path:
    """
    Drop a Kaldi-style ``ark:`` / ``ark,t:`` prefix from a table path.

    Args:
        path: Plain path or rspecifier

    Returns:
        Filesystem path
    """
    path = str(path)
    head, sep, tail = path.partition(":")
    if sep and head.split(",")[0] in ("ark", "scp") and tail:
        return Path(tail)
    return Path(path)


def read_fst_text(file_path: Union[str, Path], acceptor: bool = False) -> Automaton:
    """
    Load an automaton from an OpenFST text file.

    Args:
        file_path: Path to the text file
        acceptor: Arc lines carry a single label

    Returns:
        Automaton
    """
    file_path = strip_rspecifier(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"FST file not found: {file_path}")

    logger.info(f"Loading FST from file: {file_path}")
    with open(file_path, "r", encoding="utf-8") as f:
        fst = Automaton.from_str(f.read(), acceptor=acceptor)

    logger.info(f"Loaded {fst.num_states} states, {fst.num_arcs} arcs")
    return fst


def iter_fst_archive(lines: List[str]) -> Iterator[Tuple[str, str]]:
    """
    Split a text FST archive into (key, fst_text) entries.

    Each entry is a line holding only the key, followed by the automaton in
    OpenFST text format, terminated by a blank line (or end of file).
    """
    key = None
    body: List[str] = []
    for line in lines:
        stripped = line.strip()
        if key is None:
            if not stripped:
                continue
            fields = stripped.split()
            if len(fields) != 1:
                raise ValueError(f"Expected an archive key line, got '{stripped}'")
            key = fields[0]
            body = []
        elif stripped:
            body.append(stripped)
        else:
            yield key, "\n".join(body)
            key = None
    if key is not None:
        yield key, "\n".join(body)


def read_fst_archive(
    file_path: Union[str, Path],
    acceptor: bool = False,
) -> Dict[str, Automaton]:
    """
    Load all automata of a keyed text archive.

    Args:
        file_path: Archive path or rspecifier (``ark,t:graphs.txt``)
        acceptor: Arc lines carry a single label

    Returns:
        Dict mapping key -> Automaton (archive order)
    """
    file_path = strip_rspecifier(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"FST archive not found: {file_path}")

    logger.info(f"Loading FST archive: {file_path}")
    with open(file_path, "r", encoding="utf-8") as f:
        lines = f.read().splitlines()

    fsts = {}
    for key, text in iter_fst_archive(lines):
        if key in fsts:
            logger.warning(f"Duplicate key '{key}' in {file_path}, keeping the last entry")
        fsts[key] = Automaton.from_str(text, acceptor=acceptor)

    logger.info(f"Loaded {len(fsts)} FSTs")
    return fsts


class FstArchive:
    """
    Random-access reader over a text FST archive.

    Entries are parsed on first access.

    Example:
        >>> archive = FstArchive("ark,t:graphs.txt")
        >>> if "utt1" in archive:
        ...     fst = archive["utt1"]
    """

    def __init__(self, file_path: Union[str, Path], acceptor: bool = False):
        self.file_path = strip_rspecifier(file_path)
        self.acceptor = acceptor
        if not self.file_path.exists():
            raise FileNotFoundError(f"FST archive not found: {self.file_path}")

        with open(self.file_path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()

        self._texts: Dict[str, str] = {}
        for key, text in iter_fst_archive(lines):
            if key in self._texts:
                logger.warning(f"Duplicate key '{key}' in {self.file_path}, keeping the last entry")
            self._texts[key] = text
        self._cache: Dict[str, Automaton] = {}
        logger.info(f"Indexed {len(self._texts)} FSTs in {self.file_path}")

    def keys(self) -> List[str]:
        return list(self._texts)

    def __contains__(self, key: str) -> bool:
        return key in self._texts

    def __len__(self) -> int:
        return len(self._texts)

    def __getitem__(self, key: str) -> Automaton:
        if key not in self._texts:
            raise KeyError(f"No FST with key '{key}' has been found in '{self.file_path}'")
        if key not in self._cache:
            self._cache[key] = Automaton.from_str(self._texts[key], acceptor=self.acceptor)
        return self._cache[key]
