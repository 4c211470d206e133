"""Node definitions for the in-memory document tree."""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, assert_never

from .date_time import Date, DateTime, Time
from .encoders import ValueFormat
from .errors import NestingDepthError

if TYPE_CHECKING:
    from .array import Array
    from .table import Table

# Deepest container nesting any walk over the tree will follow.
MAX_NESTED_VALUES = 256

INTEGER_MIN = -(2**63)
INTEGER_MAX = 2**63 - 1


class NodeType(Enum):
    TABLE = auto()
    ARRAY = auto()
    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOLEAN = auto()
    DATE = auto()
    TIME = auto()
    DATE_TIME = auto()

    @property
    def is_container(self) -> bool:
        return self is NodeType.TABLE or self is NodeType.ARRAY


@dataclass(eq=False)
class Node:
    """Base of every tree element. ``type`` never changes after construction."""

    @property
    def type(self) -> NodeType:
        raise NotImplementedError

    def is_table(self) -> bool:
        return self.type is NodeType.TABLE

    def is_array(self) -> bool:
        return self.type is NodeType.ARRAY

    def is_value(self) -> bool:
        return not self.type.is_container

    def as_table(self) -> Table | None:
        return self if self.type is NodeType.TABLE else None  # type: ignore[return-value]

    def as_array(self) -> Array | None:
        return self if self.type is NodeType.ARRAY else None  # type: ignore[return-value]

    def copy(self) -> Node:
        raise NotImplementedError

    def __copy__(self) -> Node:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Node:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return deep_equal(self, other)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        from .formatter import dumps

        return dumps(self)


Payload = str | int | float | bool | Date | Time | DateTime


def _normalize_payload(value: Any) -> tuple[NodeType, Payload]:
    # bool before int, datetime before date: both are subclasses
    if isinstance(value, bool):
        return NodeType.BOOLEAN, value
    if isinstance(value, int):
        if not INTEGER_MIN <= value <= INTEGER_MAX:
            raise ValueError("Integer does not fit in 64 bits")
        return NodeType.INTEGER, value
    if isinstance(value, float):
        return NodeType.FLOAT, value
    if isinstance(value, str):
        return NodeType.STRING, value
    if isinstance(value, DateTime):
        return NodeType.DATE_TIME, value
    if isinstance(value, Date):
        return NodeType.DATE, value
    if isinstance(value, Time):
        return NodeType.TIME, value
    if isinstance(value, _dt.datetime):
        return NodeType.DATE_TIME, DateTime.from_datetime(value)
    if isinstance(value, _dt.date):
        return NodeType.DATE, Date.from_date(value)
    if isinstance(value, _dt.time):
        return NodeType.TIME, Time.from_time(value)
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


@dataclass(init=False, eq=False)
class Value(Node):
    """Holds exactly one scalar. The payload may change, its type may not."""

    _type: NodeType
    _value: Payload
    flags: ValueFormat

    def __init__(self, value: Any, flags: ValueFormat = ValueFormat.NONE):
        self._type, self._value = _normalize_payload(value)
        self.flags = flags

    @property
    def type(self) -> NodeType:
        return self._type

    @property
    def value(self) -> Payload:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._type is NodeType.FLOAT and isinstance(new_value, int) and not isinstance(new_value, bool):
            new_value = float(new_value)
        new_type, payload = _normalize_payload(new_value)
        if new_type is not self._type:
            raise TypeError(f"Cannot assign a {new_type.name.lower()} to a {self._type.name.lower()} value")
        self._value = payload

    def copy(self) -> Value:
        return Value(self._value, self.flags)

    def __repr__(self) -> str:
        if self.flags is ValueFormat.NONE:
            return f"Value({self._value!r})"
        return f"Value({self._value!r}, flags={self.flags})"


def make_node(value: Any) -> Node:
    """Wrap a raw Python value as a Node. Existing nodes are copied, never shared."""
    from .array import Array
    from .table import Table

    if isinstance(value, Node):
        return clone_node(value)
    if isinstance(value, dict):
        return Table(value)
    if isinstance(value, (list, tuple)):
        return Array(value)
    return Value(value)


def _shallow_clone(node: Node) -> Node:
    from .array import Array
    from .table import Table

    if isinstance(node, Array):
        return Array()
    if isinstance(node, Table):
        return Table(is_inline=node.is_inline)
    return node.copy()


def clone_node(node: Node) -> Node:
    """Deep copy of ``node`` built with an explicit work stack."""
    root = _shallow_clone(node)
    stack: list[tuple[Node, Node, int]] = [(node, root, 0)]
    while stack:
        source, target, depth = stack.pop()
        if depth > MAX_NESTED_VALUES:
            raise NestingDepthError("Exceeded maximum nesting while copying", depth)

        if source.type is NodeType.ARRAY:
            for elem in source.elements:  # type: ignore[attr-defined]
                child = _shallow_clone(elem)
                target.elements.append(child)  # type: ignore[attr-defined]
                if elem.type.is_container:
                    stack.append((elem, child, depth + 1))
        elif source.type is NodeType.TABLE:
            for key, elem in source.entries.items():  # type: ignore[attr-defined]
                child = _shallow_clone(elem)
                target.entries[key] = child  # type: ignore[attr-defined]
                if elem.type.is_container:
                    stack.append((elem, child, depth + 1))
    return root


def deep_equal(lhs: Node, rhs: Node) -> bool:
    """Structural equality without type coercion (``1`` never equals ``1.0``)."""
    stack: list[tuple[Node, Node, int]] = [(lhs, rhs, 0)]
    while stack:
        left, right, depth = stack.pop()
        if left is right:
            continue
        if depth > MAX_NESTED_VALUES:
            raise NestingDepthError("Exceeded maximum nesting while comparing", depth)

        node_type = left.type
        if node_type is not right.type:
            return False

        if node_type is NodeType.ARRAY:
            left_elems = left.elements  # type: ignore[attr-defined]
            right_elems = right.elements  # type: ignore[attr-defined]
            if len(left_elems) != len(right_elems):
                return False
            stack.extend((a, b, depth + 1) for a, b in zip(left_elems, right_elems))
        elif node_type is NodeType.TABLE:
            left_entries = left.entries  # type: ignore[attr-defined]
            right_entries = right.entries  # type: ignore[attr-defined]
            if len(left_entries) != len(right_entries):
                return False
            for key, child in left_entries.items():
                other = right_entries.get(key)
                if other is None:
                    return False
                stack.append((child, other, depth + 1))
        elif (
            node_type is NodeType.STRING
            or node_type is NodeType.INTEGER
            or node_type is NodeType.FLOAT
            or node_type is NodeType.BOOLEAN
            or node_type is NodeType.DATE
            or node_type is NodeType.TIME
            or node_type is NodeType.DATE_TIME
        ):
            if left.value != right.value:  # type: ignore[attr-defined]
                return False
        else:
            assert_never(node_type)
    return True
