"""
OpenFST text symbol tables.

Format: one ``symbol id`` pair per line, e.g.

    <eps> 0
    SIL 1
    AH 2
"""

from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)


class SymbolTable:
    """
    Bidirectional mapping between integer labels and symbols.

    Example:
        >>> syms = SymbolTable.from_str("<eps> 0\\nSIL 1")
        >>> syms.find(1)
        'SIL'
        >>> syms.find_id("SIL")
        1
    """

    def __init__(self, name: str = "symbols"):
        self.name = name
        self._symbols: Dict[int, str] = {}
        self._ids: Dict[str, int] = {}

    @classmethod
    def from_str(cls, s: str, name: str = "symbols") -> "SymbolTable":
        table = cls(name)
        for lineno, line in enumerate(s.splitlines(), 1):
            fields = line.split()
            if not fields:
                continue
            if len(fields) != 2:
                raise ValueError(f"Malformed symbol table line {lineno} in '{name}': '{line.strip()}'")
            try:
                key = int(fields[1])
            except ValueError as e:
                raise ValueError(f"Non-integer id on line {lineno} in '{name}': '{fields[1]}'") from e
            table.add_symbol(fields[0], key)
        return table

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "SymbolTable":
        """
        Load a symbol table from a text file.

        Args:
            file_path: Path to the symbol table

        Returns:
            SymbolTable named after the file
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Symbol table not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            table = cls.from_str(f.read(), name=str(file_path))
        logger.info(f"Loaded {len(table)} symbols from {file_path}")
        return table

    def add_symbol(self, symbol: str, key: Optional[int] = None) -> int:
        """
        Add a symbol, returning its id.

        Without ``key`` the symbol gets the next free id (or its existing id).
        """
        if key is None:
            if symbol in self._ids:
                return self._ids[symbol]
            key = max(self._symbols) + 1 if self._symbols else 0
        if key in self._symbols and self._symbols[key] != symbol:
            logger.warning(
                f"Symbol id {key} in '{self.name}' redefined: "
                f"'{self._symbols[key]}' -> '{symbol}'"
            )
        self._symbols[key] = symbol
        self._ids[symbol] = key
        return key

    def find(self, key: int) -> Optional[str]:
        """Symbol for an id, or None if unknown."""
        return self._symbols.get(key)

    def find_id(self, symbol: str) -> Optional[int]:
        """Id for a symbol, or None if unknown."""
        return self._ids.get(symbol)

    def decorate(self, label: int) -> str:
        """Display text for a label (the label itself when unknown)."""
        symbol = self._symbols.get(label)
        return symbol if symbol is not None else str(label)

    def items(self) -> Iterator[Tuple[int, str]]:
        """(id, symbol) pairs in id order."""
        return iter(sorted(self._symbols.items()))

    def __contains__(self, key: int) -> bool:
        return key in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def to_str(self) -> str:
        return "\n".join(f"{symbol} {key}" for key, symbol in self.items())

    def write(self, file_path: Union[str, Path]) -> str:
        """Save as a text symbol table."""
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(self.to_str())
            f.write("\n")
        return str(file_path)

    def __repr__(self):
        return f"SymbolTable('{self.name}', {len(self)} symbols)"
