"""
Transition-id decoration.

Kaldi alignments are sequences of transition-ids. Each transition-id
identifies a phone, an HMM state of that phone, a pdf and the index of the
transition within its transition-state. This module reads that mapping and
turns transition-ids into display strings such as ``AH_1_23_0``.

Two input formats are supported:

1. Output of Kaldi's ``show-transitions phones.txt final.mdl``:

       Transition-state 1: phone = SIL hmm-state = 0 pdf = 0
        Transition-id = 1 p = 0.75 [self-loop]
        Transition-id = 2 p = 0.25 [0 -> 1]

2. A whitespace table, one transition-id per line:

       # tid phone hmm_state pdf transition_index
       1 SIL 0 0 0
       2 SIL 0 0 1
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union
import logging
import re

from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)

_STATE_RE = re.compile(
    r"Transition-state\s+(\d+):\s+phone\s+=\s+(\S+)\s+hmm-state\s+=\s+(\d+)\s+"
    r"(?:forward-)?pdf\s+=\s+(\d+)(?:\s+self-loop-pdf\s+=\s+(\d+))?"
)
_TID_RE = re.compile(r"Transition-id\s+=\s+(\d+)")


@dataclass(frozen=True)
class TransitionInfo:
    """
    Decomposition of one transition-id.

    Attributes:
        transition_id: The label (1-based)
        phone: Phone symbol
        hmm_state: HMM state within the phone
        pdf: Pdf-id emitted by the transition
        transition_index: Index of the transition within its transition-state
    """
    transition_id: int
    phone: str
    hmm_state: int
    pdf: int
    transition_index: int

    def format(self, sep: str = "_") -> str:
        """``phone{sep}hmm_state{sep}pdf{sep}transition_index``"""
        return sep.join([self.phone, str(self.hmm_state), str(self.pdf), str(self.transition_index)])


class TransitionTable:
    """
    Lookup table transition-id -> TransitionInfo.

    Example:
        >>> table = TransitionTable.from_file("transitions.txt")
        >>> table.decorate(2)
        'SIL_0_0_1'
    """

    def __init__(self, transitions: Optional[List[TransitionInfo]] = None, sep: str = "_"):
        self.sep = sep
        self._infos: Dict[int, TransitionInfo] = {}
        for info in transitions or []:
            self._infos[info.transition_id] = info

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @classmethod
    def from_show_transitions(
        cls,
        text: str,
        phones: Optional[SymbolTable] = None,
        sep: str = "_",
    ) -> "TransitionTable":
        """
        Parse the output of Kaldi's ``show-transitions``.

        When the model has separate forward and self-loop pdfs, self-loop
        transitions report the self-loop pdf.
        """
        infos = []
        current = None
        index = 0
        for lineno, line in enumerate(text.splitlines(), 1):
            state_match = _STATE_RE.search(line)
            if state_match:
                phone, hmm_state, pdf, self_loop_pdf = state_match.group(2, 3, 4, 5)
                current = (
                    _resolve_phone(phone, phones),
                    int(hmm_state),
                    int(pdf),
                    int(self_loop_pdf) if self_loop_pdf is not None else int(pdf),
                )
                index = 0
                continue
            tid_match = _TID_RE.search(line)
            if tid_match:
                if current is None:
                    raise ValueError(f"Transition-id on line {lineno} precedes any transition-state")
                phone, hmm_state, pdf, self_loop_pdf = current
                infos.append(TransitionInfo(
                    transition_id=int(tid_match.group(1)),
                    phone=phone,
                    hmm_state=hmm_state,
                    pdf=self_loop_pdf if "[self-loop]" in line else pdf,
                    transition_index=index,
                ))
                index += 1
        return cls(infos, sep=sep)

    @classmethod
    def from_table(
        cls,
        text: str,
        phones: Optional[SymbolTable] = None,
        sep: str = "_",
    ) -> "TransitionTable":
        """Parse ``tid phone hmm_state pdf transition_index`` lines (``#`` starts a comment)."""
        infos = []
        for lineno, line in enumerate(text.splitlines(), 1):
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            fields = line.split()
            if len(fields) != 5:
                raise ValueError(f"Malformed transition table line {lineno}: expected 5 fields, got {len(fields)}")
            try:
                tid, hmm_state, pdf, trans = (int(fields[i]) for i in (0, 2, 3, 4))
            except ValueError as e:
                raise ValueError(f"Malformed transition table line {lineno}: {e}") from e
            infos.append(TransitionInfo(tid, _resolve_phone(fields[1], phones), hmm_state, pdf, trans))
        return cls(infos, sep=sep)

    @classmethod
    def from_file(
        cls,
        file_path: Union[str, Path],
        phones: Optional[SymbolTable] = None,
        sep: str = "_",
    ) -> "TransitionTable":
        """
        Load a transition table, detecting the format.

        Args:
            file_path: ``show-transitions`` output or a whitespace table
            phones: Phone symbols for resolving numeric phone ids
            sep: Separator used by decorate()

        Returns:
            TransitionTable
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Transition table not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            text = f.read()

        if "Transition-state" in text:
            table = cls.from_show_transitions(text, phones=phones, sep=sep)
        else:
            table = cls.from_table(text, phones=phones, sep=sep)
        logger.info(f"Loaded {len(table)} transition-ids from {file_path}")
        return table

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def info(self, transition_id: int) -> TransitionInfo:
        if transition_id not in self._infos:
            raise KeyError(f"Unknown transition-id {transition_id}")
        return self._infos[transition_id]

    def decorate(self, label: int) -> str:
        """Display text for a transition-id, e.g. ``AH_1_23_0``."""
        return self.info(label).format(self.sep)

    def transition_ids(self) -> List[int]:
        return sorted(self._infos)

    def __iter__(self) -> Iterator[TransitionInfo]:
        return (self._infos[tid] for tid in self.transition_ids())

    def __contains__(self, transition_id: int) -> bool:
        return transition_id in self._infos

    def __len__(self) -> int:
        return len(self._infos)

    def __repr__(self):
        return f"TransitionTable({len(self)} transition-ids)"


def _resolve_phone(phone: str, phones: Optional[SymbolTable]) -> str:
    """Map a numeric phone id to its symbol when a phone table is given."""
    if phones is not None and phone.isdigit():
        symbol = phones.find(int(phone))
        if symbol is None:
            raise KeyError(f"Phone id {phone} not in {phones.name}")
        return symbol
    return phone


def make_transition_symbols(
    table: TransitionTable,
    phones: Optional[SymbolTable] = None,
    sep: str = "_",
) -> SymbolTable:
    """
    Build a symbol table naming every transition-id.

    Id 0 gets the phone table's id-0 symbol (``<eps>`` by default); every
    transition-id gets ``phone{sep}hmm_state{sep}pdf{sep}transition_index``.
    The result can be passed to fstdraw as an input symbol table.

    Args:
        table: TransitionTable
        phones: Phone symbols (only id 0 is used)
        sep: Separator between the fields

    Returns:
        SymbolTable
    """
    syms = SymbolTable("tid-symbol-table")
    eps = phones.find(0) if phones is not None else None
    syms.add_symbol(eps if eps is not None else "<eps>", 0)
    for info in table:
        syms.add_symbol(info.format(sep), info.transition_id)
        logger.debug(
            f"TransID:{info.transition_id}; Phone:{info.phone}; "
            f"HMM state:{info.hmm_state}; PDF:{info.pdf}; trans:{info.transition_index}"
        )
    return syms
