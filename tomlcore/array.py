"""Array node: an ordered, owning sequence of nodes and its structural algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from .errors import NestingDepthError
from .nodes import MAX_NESTED_VALUES, Node, NodeType, clone_node, deep_equal, make_node


@dataclass(init=False, eq=False)
class Array(Node):
    elements: list[Node]

    def __init__(self, elements: Iterable[Any] = ()):
        self.elements = [make_node(elem) for elem in elements]

    @property
    def type(self) -> NodeType:
        return NodeType.ARRAY

    # Construction / assignment ------------------------------------------------

    @classmethod
    def take(cls, other: Array) -> Array:
        """Build an array that takes over ``other``'s elements, leaving it empty."""
        arr = cls()
        arr.elements = other.elements
        other.elements = []
        return arr

    def copy(self) -> Array:
        return clone_node(self)  # type: ignore[return-value]

    def assign(self, other: Array, *, move: bool = False) -> Array:
        if other is self:
            return self
        if move:
            self.elements = other.elements
            other.elements = []
        else:
            self.elements = other.copy().elements
        return self

    # Sequence protocol --------------------------------------------------------

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> Node:
        return self.elements[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.elements[index] = make_node(value)

    def __delitem__(self, index: int) -> None:
        del self.elements[index]

    def append(self, value: Any) -> Node:
        node = make_node(value)
        self.elements.append(node)
        return node

    def extend(self, values: Iterable[Any]) -> None:
        self.insert_many(len(self.elements), values)

    def _insertion_index(self, index: int) -> int:
        # negative indices count from the end, as with list.insert
        if index < 0:
            return max(len(self.elements) + index, 0)
        return index

    def insert(self, index: int, value: Any) -> Node:
        node = make_node(value)
        index = self._insertion_index(index)
        self._preinsertion_resize(index, 1)
        self.elements[index] = node
        return node

    def insert_many(self, index: int, values: Iterable[Any]) -> int:
        """Insert ``values`` before ``index``; returns the index after the last inserted node."""
        nodes = [make_node(value) for value in values]
        index = self._insertion_index(index)
        if not nodes:
            return index
        self._preinsertion_resize(index, len(nodes))
        for offset, node in enumerate(nodes):
            self.elements[index + offset] = node
        return index + len(nodes)

    def erase(self, index: int) -> None:
        del self.elements[index]

    def pop(self, index: int = -1) -> Node:
        return self.elements.pop(index)

    def clear(self) -> None:
        self.elements.clear()

    def _preinsertion_resize(self, index: int, count: int) -> None:
        # Leaves ``count`` empty (None) slots at ``index``; callers fill them.
        assert 0 <= index <= len(self.elements), "insertion index out of range"
        assert count >= 1, "insertion count must be at least 1"
        old_size = len(self.elements)
        new_size = old_size + count
        self.elements.extend([None] * count)  # type: ignore[list-item]
        if index != old_size:
            right = new_size - 1
            for left in range(old_size - 1, index - 1, -1):
                self.elements[right] = self.elements[left]
                right -= 1
            for slot in range(index, min(index + count, old_size)):
                self.elements[slot] = None  # type: ignore[call-overload]

    # Structural queries ---------------------------------------------------------

    def check_homogeneous(self, ntype: NodeType | None = None) -> tuple[bool, Node | None]:
        """Like :meth:`is_homogeneous`, also returning the first element of another type."""
        if not self.elements:
            return False, None
        if ntype is None:
            ntype = self.elements[0].type
        for elem in self.elements:
            if elem.type is not ntype:
                return False, elem
        return True, None

    def is_homogeneous(self, ntype: NodeType | None = None) -> bool:
        """True when every element has type ``ntype`` (the first element's, if omitted).

        An empty array is never homogeneous.
        """
        return self.check_homogeneous(ntype)[0]

    def is_array_of_tables(self) -> bool:
        return self.is_homogeneous(NodeType.TABLE)

    @staticmethod
    def equal(lhs: Array, rhs: Array) -> bool:
        if lhs is rhs:
            return True
        return deep_equal(lhs, rhs)

    def total_leaf_count(self) -> int:
        """Count the non-array values reachable through nested arrays."""
        leaves = 0
        stack: list[Iterator[Node]] = [iter(self.elements)]
        while stack:
            for elem in stack[-1]:
                child = elem.as_array()
                if child is not None:
                    if len(stack) > MAX_NESTED_VALUES:
                        raise NestingDepthError("Exceeded maximum nesting while counting leaves", len(stack))
                    stack.append(iter(child.elements))
                    break
                leaves += 1
            else:
                stack.pop()
        return leaves

    # Flattening -------------------------------------------------------------------

    def flatten(self) -> Array:
        """Replace every nested array by its leaves, in place and in order.

        Nested arrays without any leaves are dropped.
        """
        if not self.elements:
            return self

        requires_flattening = False
        for i in range(len(self.elements) - 1, -1, -1):
            child = self.elements[i].as_array()
            if child is None:
                continue
            if child.total_leaf_count():
                requires_flattening = True
            else:
                del self.elements[i]

        if not requires_flattening:
            return self

        i = 0
        while i < len(self.elements):
            child = self.elements[i].as_array()
            if child is None:
                i += 1
                continue
            leaf_count = child.total_leaf_count()
            if not leaf_count:
                del self.elements[i]
                continue
            if leaf_count > 1:
                self._preinsertion_resize(i + 1, leaf_count - 1)
            i = self._flatten_child(child, i)

        return self

    def _flatten_child(self, child: Array, dest_index: int) -> int:
        # Moves the leaves of ``child`` into consecutive slots from ``dest_index``.
        stack: list[Iterator[Node]] = [iter(child.elements)]
        while stack:
            for elem in stack[-1]:
                nested = elem.as_array()
                if nested is None:
                    self.elements[dest_index] = elem
                    dest_index += 1
                elif nested.elements:
                    stack.append(iter(nested.elements))
                    break
            else:
                stack.pop()
        child.elements = []
        return dest_index
