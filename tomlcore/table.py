"""Table node: an insertion-ordered, owning key -> node mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ItemsView, Iterator, KeysView, Mapping, ValuesView

from .nodes import Node, NodeType, clone_node, make_node


@dataclass(init=False, eq=False)
class Table(Node):
    """``is_inline`` selects ``{ k = v }`` over ``[section]`` syntax when printed."""

    entries: dict[str, Node]
    is_inline: bool

    def __init__(self, entries: Mapping[str, Any] | None = None, is_inline: bool = False):
        self.entries = {}
        self.is_inline = is_inline
        for key, value in (entries or {}).items():
            self[key] = value

    @property
    def type(self) -> NodeType:
        return NodeType.TABLE

    def copy(self) -> Table:
        return clone_node(self)  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __getitem__(self, key: str) -> Node:
        return self.entries[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Table keys must be strings, not {type(key).__name__}")
        self.entries[key] = make_node(value)

    def __delitem__(self, key: str) -> None:
        del self.entries[key]

    def get(self, key: str, default: Node | None = None) -> Node | None:
        return self.entries.get(key, default)

    def keys(self) -> KeysView[str]:
        return self.entries.keys()

    def values(self) -> ValuesView[Node]:
        return self.entries.values()

    def items(self) -> ItemsView[str, Node]:
        return self.entries.items()

    def insert(self, key: str, value: Any) -> bool:
        """Add ``key`` only if it is absent. Returns whether it was added."""
        if key in self.entries:
            return False
        self[key] = value
        return True

    def insert_or_assign(self, key: str, value: Any) -> Node:
        self[key] = value
        return self.entries[key]
