"""Identity-keyed side tables for data that does not live on resources.

Links, relationship meta and original member names are looked up later by
the very object the caller is holding: ``doc.links[doc.data]`` where
``doc.data`` is a list, or ``doc.rel_links[article.comments]``.  Lists are
unhashable and two equal lists must still be told apart, so these tables key
on ``id()`` and keep a reference to each key to stop the id being reused.
"""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass, field
from typing import Any


class AbsentData:
    """Stand-in value for a relationship that has no ``data`` member.

    Each instance is unique and only equal to itself.  It exists so the
    relationship's ``links`` and ``meta`` have a key in the side tables.
    Falsy, so ``if article.author:`` reads naturally.
    """

    __slots__ = ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"<AbsentData at {id(self):#x}>"


class IdentityDict(MutableMapping):
    """Mutable mapping that compares keys by identity rather than equality."""

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, Any]] = {}

    def __getitem__(self, key: Any) -> Any:
        try:
            return self._entries[id(key)][1]
        except KeyError:
            raise KeyError(key) from None

    def __setitem__(self, key: Any, value: Any) -> None:
        self._entries[id(key)] = (key, value)

    def __delitem__(self, key: Any) -> None:
        try:
            del self._entries[id(key)]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return id(key) in self._entries

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        items = ", ".join(f"{key!r}: {value!r}" for key, value in self._entries.values())
        return f"{type(self).__name__}({{{items}}})"


@dataclass
class SideTables:
    """The four identity-keyed tables filled in while building a document.

    Attributes:
        links: Resource -> its ``links`` member; top-level ``data`` -> root ``links``.
        rel_links: Resolved relationship value -> the relationship's ``links``.
        meta: Resolved relationship value -> the relationship's ``meta``;
            top-level ``data`` -> root ``meta``.
        original_keys: Resource -> ``{original member name: value}``.
    """

    links: IdentityDict = field(default_factory=IdentityDict)
    rel_links: IdentityDict = field(default_factory=IdentityDict)
    meta: IdentityDict = field(default_factory=IdentityDict)
    original_keys: IdentityDict = field(default_factory=IdentityDict)

    def record_original(self, resource: Any, key: str, value: Any) -> None:
        if resource not in self.original_keys:
            self.original_keys[resource] = {}
        self.original_keys[resource][key] = value
