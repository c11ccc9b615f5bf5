"""Import-list normalization.

An Import-Package value is treated as an opaque list split on the literal
``",`` delimiter: every spec except the last is expected to end with a
quoted attribute (``org.foo;version="[1,2)"``). Nothing below the delimiter
is parsed, so the manifest and the pom are tokenized the same fragile way
and the two sides stay comparable.
"""

from __future__ import annotations

from dataclasses import dataclass

DELIMITER = '",'
SEPARATOR = '",\n'


@dataclass(frozen=True)
class ImportList:
    """Trimmed, non-empty import specs in their source order."""

    entries: tuple[str, ...] = ()

    @property
    def sorted(self) -> tuple[str, ...]:
        """Entries in code-point order, for order-insensitive comparison."""
        return tuple(sorted(self.entries))

    def joined(self) -> str:
        """Re-join in source order, one spec per line."""
        return SEPARATOR.join(self.entries)

    def same_imports(self, other: ImportList) -> bool:
        return self.sorted == other.sorted

    def difference(self, other: ImportList) -> tuple[list[str], list[str]]:
        """Return (specs only in self, specs only in other)."""
        mine, theirs = set(self.entries), set(other.entries)
        added = [e for e in self.entries if e not in theirs]
        removed = [e for e in other.entries if e not in mine]
        return added, removed

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


def normalize(raw: str | None) -> ImportList:
    """Split a raw header value into an ImportList.

    Fragments are stripped and empty ones dropped; malformed specs pass
    through unchanged. ``None`` (an element with no text) is an empty list.
    """
    if not raw:
        return ImportList()
    fragments = (fragment.strip() for fragment in raw.split(DELIMITER))
    return ImportList(tuple(f for f in fragments if f))
