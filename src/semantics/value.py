# src/semantics/value.py
"""
Tagged-union view over the data tree produced by mod scripts.

The data tree arrives as plain Python natives (dict / list / str / int /
float / bool / None) converted from the scripting engine. Shapes vary a lot
between mods, so every accessor here returns a Value instead of raising:
a missing key, an out-of-range index or a kind mismatch all produce
Value.MISSING. Fallback chains are then written as

    name = first_present(item.get("name"), item.at(1)).as_str()

rather than nested isinstance checks.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple


class Kind(Enum):
    MISSING = "missing"
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


def _kind_of(raw: Any) -> Kind:
    if raw is None:
        return Kind.MISSING
    # bool before number: bool is an int subclass
    if isinstance(raw, bool):
        return Kind.BOOL
    if isinstance(raw, str):
        return Kind.STRING
    if isinstance(raw, (int, float)):
        return Kind.NUMBER
    if isinstance(raw, dict):
        return Kind.MAPPING
    if isinstance(raw, (list, tuple)):
        return Kind.SEQUENCE
    return Kind.OTHER


class Value:
    """
    Immutable wrapper around one node of the data tree.

    Sequences are indexed 1-based via `at()` to match how mod scripts
    write positional entries ({"iron-plate", 2}). Mappings with integer
    keys (mixed Lua tables) answer `at()` as well.
    """

    __slots__ = ("_raw", "_kind")

    MISSING: "Value"

    def __init__(self, raw: Any = None) -> None:
        self._raw = raw
        self._kind = _kind_of(raw)

    def __repr__(self) -> str:
        return f"Value({self._kind.value}: {self._raw!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Value):
            return self._kind is other._kind and self._raw == other._raw
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._kind, repr(self._raw)))

    # ------------------------------------------------------------------
    # Kind inspection
    # ------------------------------------------------------------------

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def raw(self) -> Any:
        return self._raw

    @property
    def is_missing(self) -> bool:
        return self._kind is Kind.MISSING

    @property
    def is_present(self) -> bool:
        return self._kind is not Kind.MISSING

    @property
    def is_mapping(self) -> bool:
        return self._kind is Kind.MAPPING

    @property
    def is_sequence(self) -> bool:
        return self._kind is Kind.SEQUENCE

    @property
    def is_string(self) -> bool:
        return self._kind is Kind.STRING

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def get(self, key: Any) -> "Value":
        """Mapping lookup; anything else yields MISSING."""
        if self._kind is not Kind.MAPPING:
            return Value.MISSING
        return Value(self._raw.get(key))

    def at(self, index: int) -> "Value":
        """1-based positional lookup on sequences and integer-keyed mappings."""
        if self._kind is Kind.SEQUENCE:
            if 1 <= index <= len(self._raw):
                return Value(self._raw[index - 1])
            return Value.MISSING
        if self._kind is Kind.MAPPING:
            return Value(self._raw.get(index))
        return Value.MISSING

    def path(self, *keys: Any) -> "Value":
        """Follow a chain of mapping keys."""
        node = self
        for key in keys:
            node = node.get(key)
        return node

    def items(self) -> Iterator[Tuple[Any, "Value"]]:
        """(key, Value) pairs of a mapping, 1-based (index, Value) of a sequence."""
        if self._kind is Kind.MAPPING:
            for key, raw in self._raw.items():
                yield key, Value(raw)
        elif self._kind is Kind.SEQUENCE:
            for idx, raw in enumerate(self._raw, start=1):
                yield idx, Value(raw)

    def elements(self) -> List["Value"]:
        """Child values of a sequence or mapping, in container order."""
        return [v for _, v in self.items()]

    def __len__(self) -> int:
        if self._kind in (Kind.MAPPING, Kind.SEQUENCE):
            return len(self._raw)
        return 0

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def as_str(self) -> Optional[str]:
        return self._raw if self._kind is Kind.STRING else None

    def as_number(self) -> Optional[float]:
        return float(self._raw) if self._kind is Kind.NUMBER else None

    def as_bool(self) -> Optional[bool]:
        return self._raw if self._kind is Kind.BOOL else None

    def as_scalar(self) -> Any:
        """Raw str/number/bool, or None for containers and missing values."""
        if self._kind in (Kind.STRING, Kind.NUMBER, Kind.BOOL):
            return self._raw
        return None


Value.MISSING = Value(None)


def first_present(*values: Value) -> Value:
    """Return the first non-missing Value, or MISSING."""
    for value in values:
        if value.is_present:
            return value
    return Value.MISSING


__all__ = [
    "Kind",
    "Value",
    "first_present",
]
