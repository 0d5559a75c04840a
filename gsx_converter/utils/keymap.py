"""
Ordered, case-insensitive key map.

Section files are edited by hand and the same key shows up as ``HasJetway``,
``hasjetway`` or ``HASJETWAY`` depending on who wrote the file. Keys are
case-folded once at insertion time so lookups are O(1), while the spelling
seen first is kept for iteration so metadata can be rebuilt verbatim.
"""

from typing import Dict, Iterator, List, Optional, Tuple


class KeyMap:
    """Insertion-ordered mapping with case-insensitive keys."""

    def __init__(self, items: Optional[List[Tuple[str, str]]] = None):
        # folded key -> (original key, value); dicts keep insertion order
        self._entries: Dict[str, Tuple[str, str]] = {}
        for key, value in items or []:
            self[key] = value

    @staticmethod
    def _fold(key: str) -> str:
        return key.strip().casefold()

    def __setitem__(self, key: str, value: str) -> None:
        folded = self._fold(key)
        existing = self._entries.get(folded)
        original = existing[0] if existing else key.strip()
        self._entries[folded] = (original, value)

    def __getitem__(self, key: str) -> str:
        return self._entries[self._fold(key)][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._fold(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._entries.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyMap):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __repr__(self) -> str:
        return f"KeyMap({list(self.items())!r})"

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        entry = self._entries.get(self._fold(key))
        return entry[1] if entry else default

    def items(self) -> Iterator[Tuple[str, str]]:
        """Iterate ``(original key, value)`` pairs in insertion order."""
        return iter(self._entries.values())

    def keys(self) -> List[str]:
        return list(self)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.items())
