"""Per-view trie mapping key sequences to bindings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from .models import Binding, NO_ACTION


@dataclass(slots=True)
class TrieNode:
    """Single trie node keyed by one character of a key sequence."""

    binding: Optional[Binding] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, char: str) -> "TrieNode":
        return self.children.setdefault(char, TrieNode())


@dataclass(frozen=True, slots=True)
class StoreLookup:
    """Outcome of looking up one sequence in one store."""

    binding: Optional[Binding] = None
    exact: bool = False
    has_longer: bool = False


_EMPTY_LOOKUP = StoreLookup()


class BindingStore:
    """Prefix-searchable mapping from key sequence to ``Binding``."""

    def __init__(self) -> None:
        self._root = TrieNode()
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, sequence: object) -> bool:
        if not isinstance(sequence, str):
            return False
        node = self._find(sequence)
        return node is not None and node.binding is not None

    def insert(self, sequence: str, binding: Binding) -> None:
        if not sequence:
            raise ValueError("sequence must be a non-empty string")
        node = self._root
        for char in sequence:
            node = node.child(char)
        if node.binding is None:
            self._size += 1
        node.binding = binding

    def lookup(self, sequence: str) -> StoreLookup:
        if not sequence:
            # Every stored key extends the empty string, but it is never bound.
            return StoreLookup(has_longer=bool(self._size))
        node = self._find(sequence)
        if node is None:
            return _EMPTY_LOOKUP
        return StoreLookup(
            binding=node.binding,
            exact=node.binding is not None,
            has_longer=bool(node.children),
        )

    def get(self, sequence: str) -> Binding:
        found = self.lookup(sequence)
        return found.binding if found.binding else Binding.for_action(NO_ACTION)

    def items(self) -> list[tuple[str, Binding]]:
        return sorted(self._walk(self._root, ""), key=lambda item: item[0])

    def _find(self, sequence: str) -> Optional[TrieNode]:
        node = self._root
        for char in sequence:
            child = node.children.get(char)
            if child is None:
                return None
            node = child
        return node

    def _walk(self, node: TrieNode, prefix: str) -> Iterator[tuple[str, Binding]]:
        if node.binding is not None:
            yield prefix, node.binding
        for char, child in node.children.items():
            yield from self._walk(child, prefix + char)


__all__ = ["BindingStore", "StoreLookup", "TrieNode"]
