"""
=============================================================================
FIELD ACCUMULATOR
=============================================================================

Both the header parser and the query parsers collect "name -> value"
pairs where a name may show up more than once. What happens on a repeat
differs per caller, but the bookkeeping is the same, so it lives here.

=============================================================================
PER-KEY STATE
=============================================================================

Each key moves through an explicit state machine instead of being
type-sniffed at runtime:

        ┌──────────┐   set()          ┌──────────────┐
        │  UNSEEN  │ ────────────────►│  Scalar(v)   │
        └──────────┘                  └──────┬───────┘
             │                               │ append(w)
             │ start_list() / append()       ▼
             │                        ┌──────────────┐
             └───────────────────────►│ Values(v, w) │◄─┐
                                      └──────┬───────┘  │
                                             └──────────┘
                                               append()

Insertion order is the order in which keys were FIRST seen. Overwriting
a scalar with set() keeps its original position (plain dict semantics).

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Union


@dataclass
class Scalar:
    """A key seen once (or deliberately stored as a single value)."""
    value: Any


@dataclass
class Values:
    """A key holding an ordered list of values."""
    items: List[Any] = field(default_factory=list)


Entry = Union[Scalar, Values]


class FieldAccumulator:
    """
    Ordered collection of per-key Scalar/Values entries.

    Example:
        acc = FieldAccumulator()
        acc.set("Host", "example.com")
        acc.append("Set-Cookie", "a=b")
        acc.append("Set-Cookie", "c=d")
        acc.to_dict()
        # {"Host": "example.com", "Set-Cookie": ["a=b", "c=d"]}
    """

    def __init__(self):
        self._entries: Dict[str, Entry] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def is_list(self, name: str) -> bool:
        return isinstance(self._entries.get(name), Values)

    def set(self, name: str, value: Any) -> None:
        """Store a scalar, replacing whatever the key held before."""
        self._entries[name] = Scalar(value)

    def start_list(self, name: str, value: Any) -> None:
        """Store a one-element list, replacing whatever the key held before."""
        self._entries[name] = Values([value])

    def append(self, name: str, value: Any) -> None:
        """
        Append a value under name.

        An unseen key starts a new list; a Scalar entry is promoted to a
        Values entry holding the old value first, then the new one.
        """
        entry = self._entries.get(name)

        if entry is None:
            self._entries[name] = Values([value])
        elif isinstance(entry, Scalar):
            self._entries[name] = Values([entry.value, value])
        else:
            entry.items.append(value)

    def to_dict(self) -> Dict[str, Any]:
        """Flatten into a plain dict (lists are copied)."""
        result: Dict[str, Any] = {}
        for name, entry in self._entries.items():
            if isinstance(entry, Values):
                result[name] = list(entry.items)
            else:
                result[name] = entry.value
        return result
