"""
Automaton data structures.

Design Philosophy:
- States and arcs live in flat arrays (an arena), addressed by plain ints
- Arc positions within a state are stable for the automaton's lifetime
- The automaton is read-only once built, so it can be shared freely

The arc layout mirrors k2.Fsa: an int32 tensor of shape [num_arcs, 4]
holding (src, dst, ilabel, olabel), a float32 ``scores`` tensor, and
``row_splits`` giving each state's arc range.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Iterator, Iterable, Tuple, Union
import logging
import math

import torch

logger = logging.getLogger(__name__)

# Label 0 never names an observation
EPSILON = 0

# Tropical semiring constants
WEIGHT_ZERO = math.inf
WEIGHT_ONE = 0.0

ArcTuple = Tuple[int, int, int, int, float]


@dataclass(frozen=True)
class Arc:
    """
    A single transition.

    Attributes:
        src: Source state id
        dst: Target state id
        ilabel: Input label (0 = epsilon)
        olabel: Output label
        weight: Arc weight (opaque to the search)
    """
    src: int
    dst: int
    ilabel: int
    olabel: int
    weight: float = WEIGHT_ONE

    @property
    def is_epsilon(self) -> bool:
        """True if the arc consumes no observation."""
        return self.ilabel == EPSILON


@dataclass(eq=False)
class Automaton:
    """
    Immutable weighted automaton stored as flat tensors.

    Attributes:
        arcs: int32 tensor [num_arcs, 4] of (src, dst, ilabel, olabel),
            grouped by src
        scores: float32 tensor [num_arcs] of arc weights
        row_splits: int64 tensor [num_states + 1]; arcs of state s are
            arcs[row_splits[s]:row_splits[s + 1]]
        final_weights: float32 tensor [num_states]; inf means not final
        start: Start state, or None for an automaton without one

    Example:
        >>> fst = Automaton.from_arcs([(0, 1, 5, 5, 0.0)], finals={1: 0.0})
        >>> fst.arc(0, 0).dst
        1
    """
    arcs: torch.Tensor
    scores: torch.Tensor
    row_splits: torch.Tensor
    final_weights: torch.Tensor
    start: Optional[int] = 0

    _arc_list: List[Arc] = field(init=False, repr=False, compare=False)
    _splits: List[int] = field(init=False, repr=False, compare=False)
    _finals: List[float] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.arcs.dim() != 2 or self.arcs.size(1) != 4:
            raise ValueError(f"arcs must have shape [num_arcs, 4], got {tuple(self.arcs.shape)}")
        num_states = self.final_weights.numel()
        if self.row_splits.numel() != num_states + 1:
            raise ValueError(
                f"row_splits has {self.row_splits.numel()} entries, "
                f"expected {num_states + 1}"
            )
        if self.scores.numel() != self.arcs.size(0):
            raise ValueError("scores must have one entry per arc")
        if self.start is not None and not 0 <= self.start < num_states:
            raise ValueError(f"Start state {self.start} out of range [0, {num_states})")

        # Python-side views for O(1) scalar access during search
        rows = self.arcs.tolist()
        weights = self.scores.tolist()
        self._arc_list = [
            Arc(src, dst, ilabel, olabel, weight)
            for (src, dst, ilabel, olabel), weight in zip(rows, weights)
        ]
        self._splits = self.row_splits.tolist()
        self._finals = self.final_weights.tolist()

        splits = self._splits
        if splits[0] != 0 or splits[-1] != len(self._arc_list):
            raise ValueError(
                f"row_splits must start at 0 and end at {len(self._arc_list)}, "
                f"got {splits[0]} and {splits[-1]}"
            )
        for state in range(num_states):
            begin, end = splits[state], splits[state + 1]
            if begin > end:
                raise ValueError(f"row_splits decreases at state {state}: {begin} > {end}")
            for arc in self._arc_list[begin:end]:
                if arc.src != state:
                    raise ValueError(f"Arc {arc} is stored in the arc range of state {state}")

        for arc in self._arc_list:
            if not 0 <= arc.dst < num_states:
                raise ValueError(f"Arc {arc} points to unknown state {arc.dst}")

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_arcs(
        cls,
        arcs: Iterable[Union[ArcTuple, Tuple[int, int, int, int]]],
        finals: Optional[Dict[int, float]] = None,
        start: Optional[int] = 0,
        num_states: Optional[int] = None,
    ) -> "Automaton":
        """
        Build an automaton from (src, dst, ilabel, olabel[, weight]) tuples.

        Arcs keep the relative order in which they are listed for each
        source state; that order defines their positions.

        Without arcs, finals or an explicit ``num_states`` the result is the
        empty automaton: 0 states and no start state.

        Args:
            arcs: Arc tuples; weight defaults to 0 (tropical one)
            finals: Mapping state -> final weight for accepting states
            start: Start state (None for no start state)
            num_states: Number of states; inferred from ids if None

        Returns:
            Automaton
        """
        finals = dict(finals or {})
        rows = []
        for arc in arcs:
            if len(arc) == 4:
                src, dst, ilabel, olabel = arc
                weight = WEIGHT_ONE
            elif len(arc) == 5:
                src, dst, ilabel, olabel, weight = arc
            else:
                raise ValueError(f"Arc must have 4 or 5 fields, got {arc}")
            if src < 0 or dst < 0:
                raise ValueError(f"Negative state id in arc {arc}")
            rows.append((int(src), int(dst), int(ilabel), int(olabel), float(weight)))

        if num_states is None:
            ids = [r[0] for r in rows] + [r[1] for r in rows] + list(finals)
            if ids and start is not None:
                ids.append(start)
            num_states = max(ids) + 1 if ids else 0

        for state in finals:
            if not 0 <= state < num_states:
                raise ValueError(f"Final state {state} out of range [0, {num_states})")

        # Stable sort keeps per-state listing order
        rows = sorted(rows, key=lambda r: r[0])

        if rows:
            arc_tensor = torch.tensor([r[:4] for r in rows], dtype=torch.int32)
        else:
            arc_tensor = torch.zeros((0, 4), dtype=torch.int32)
        scores = torch.tensor([r[4] for r in rows], dtype=torch.float32)

        counts = torch.bincount(arc_tensor[:, 0].long(), minlength=num_states)
        if counts.numel() > num_states:
            raise ValueError(f"Arc source state out of range [0, {num_states})")
        row_splits = torch.zeros(num_states + 1, dtype=torch.int64)
        row_splits[1:] = torch.cumsum(counts, dim=0)

        final_weights = torch.full((num_states,), WEIGHT_ZERO, dtype=torch.float32)
        for state, weight in finals.items():
            final_weights[state] = float(weight)

        if num_states == 0:
            start = None

        return cls(
            arcs=arc_tensor,
            scores=scores,
            row_splits=row_splits,
            final_weights=final_weights,
            start=start,
        )

    @classmethod
    def from_str(cls, s: str, acceptor: bool = False) -> "Automaton":
        """
        Parse the OpenFST text format.

        Arc lines are ``src dst ilabel olabel [weight]`` (``src dst label
        [weight]`` when ``acceptor`` is True); final-state lines are
        ``state [weight]``. The source of the first arc line is the start
        state, as in fstcompile.

        Args:
            s: Text description
            acceptor: Treat arc lines as having a single label

        Returns:
            Automaton
        """
        arcs = []
        finals: Dict[int, float] = {}
        start = None
        num_label_fields = 1 if acceptor else 2

        for lineno, line in enumerate(s.splitlines(), 1):
            fields = line.split()
            if not fields:
                continue
            try:
                if len(fields) <= 2:
                    state = int(fields[0])
                    weight = float(fields[1]) if len(fields) == 2 else WEIGHT_ONE
                    finals[state] = weight
                    if start is None:
                        start = state
                    continue

                if len(fields) > 3 + num_label_fields or len(fields) < 2 + num_label_fields:
                    raise ValueError(f"unexpected number of fields ({len(fields)})")
                src, dst = int(fields[0]), int(fields[1])
                ilabel = int(fields[2])
                olabel = int(fields[3]) if not acceptor else ilabel
                rest = fields[2 + num_label_fields:]
                weight = float(rest[0]) if rest else WEIGHT_ONE
            except ValueError as e:
                raise ValueError(f"Malformed FST line {lineno}: '{line.strip()}' ({e})") from e

            if start is None:
                start = src
            arcs.append((src, dst, ilabel, olabel, weight))

        return cls.from_arcs(arcs, finals=finals, start=start)

    @classmethod
    def from_k2(cls, fsa) -> "Automaton":
        """
        Convert a single k2.Fsa.

        k2 reaches its final state through arcs labelled -1; those become
        epsilon arcs and the k2 final state (the last state) is accepting
        with weight 0. Scores are negated, k2 scores being log-probabilities.

        Args:
            fsa: k2.Fsa (a single FSA, not an FsaVec)

        Returns:
            Automaton
        """
        try:
            import k2  # noqa: F401
        except ImportError:
            raise ImportError(
                "k2 is required to convert k2.Fsa objects. "
                "Install with: pip install k2 -f https://k2-fsa.github.io/k2/cpu.html"
            )

        values = fsa.arcs.values()[:, :3].cpu()
        labels = values[:, 2].clone()
        labels[labels == -1] = EPSILON
        if hasattr(fsa, "aux_labels") and isinstance(fsa.aux_labels, torch.Tensor):
            olabels = fsa.aux_labels.cpu().clone()
            olabels[olabels == -1] = EPSILON
        else:
            olabels = labels
        scores = (-fsa.scores.detach().cpu()).tolist()

        num_states = int(fsa.shape[0])
        arcs = [
            (src, dst, ilabel, olabel, weight)
            for (src, dst, _), ilabel, olabel, weight in zip(
                values.tolist(), labels.tolist(), olabels.tolist(), scores
            )
        ]
        finals = {num_states - 1: WEIGHT_ONE} if num_states > 0 else {}
        logger.debug(f"Converted k2.Fsa: {num_states} states, {len(arcs)} arcs")
        return cls.from_arcs(arcs, finals=finals, start=0 if num_states else None,
                             num_states=num_states)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def num_states(self) -> int:
        return len(self._finals)

    @property
    def num_arcs(self) -> int:
        return len(self._arc_list)

    def states(self) -> range:
        """All state ids."""
        return range(self.num_states)

    def is_start(self, state: int) -> bool:
        return self.start is not None and state == self.start

    def final_weight(self, state: int) -> float:
        """Final weight of a state (inf if not accepting)."""
        return self._finals[state]

    def is_final(self, state: int) -> bool:
        return self._finals[state] != WEIGHT_ZERO

    def final_states(self) -> List[int]:
        return [s for s, w in enumerate(self._finals) if w != WEIGHT_ZERO]

    def num_arcs_at(self, state: int) -> int:
        """Number of outgoing arcs of a state."""
        return self._splits[state + 1] - self._splits[state]

    def arc(self, state: int, index: int) -> Arc:
        """
        Get the arc at a position within a state.

        Args:
            state: State id
            index: Position among the state's outgoing arcs

        Returns:
            Arc
        """
        begin = self._splits[state]
        if not 0 <= index < self._splits[state + 1] - begin:
            raise IndexError(f"State {state} has no arc at position {index}")
        return self._arc_list[begin + index]

    def arcs_from(self, state: int, index: int = 0) -> Iterator[Tuple[int, Arc]]:
        """
        Iterate over (position, arc) pairs of a state, starting at ``index``.

        Starting past position 0 is how a caller resumes (seeks) iteration.
        """
        begin, end = self._splits[state], self._splits[state + 1]
        for pos in range(max(index, 0), end - begin):
            yield pos, self._arc_list[begin + pos]

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_str(self) -> str:
        """
        Serialize to OpenFST text format.

        Arcs of the start state come first so fstcompile sees the same start.
        """
        order = list(self.states())
        if self.start is not None:
            order.remove(self.start)
            order.insert(0, self.start)

        lines = []
        for state in order:
            for _, arc in self.arcs_from(state):
                line = f"{arc.src} {arc.dst} {arc.ilabel} {arc.olabel}"
                if arc.weight != WEIGHT_ONE:
                    line += f" {arc.weight:g}"
                lines.append(line)
        for state in order:
            if self.is_final(state):
                weight = self.final_weight(state)
                lines.append(f"{state}" if weight == WEIGHT_ONE else f"{state} {weight:g}")
        return "\n".join(lines)

    def __repr__(self):
        return f"Automaton({self.num_states} states, {self.num_arcs} arcs, start={self.start})"
