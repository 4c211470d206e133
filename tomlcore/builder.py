"""Builders that convert plain Python data into document trees."""

from __future__ import annotations

from typing import Any, Mapping, NotRequired, TypedDict

from .array import Array
from .errors import NestingDepthError
from .logger import Logger
from .nodes import MAX_NESTED_VALUES, Node, Value
from .table import Table
from .utils import resolve_config


class BuilderConfig(TypedDict):
    inline_tables: NotRequired[bool]
    max_depth: NotRequired[int]
    enable_logger: NotRequired[bool]


class BuilderConfigRequired(TypedDict):
    inline_tables: bool
    max_depth: int
    enable_logger: bool


DEFAULT_CONFIG: BuilderConfigRequired = {
    "inline_tables": False,
    "max_depth": MAX_NESTED_VALUES,
    "enable_logger": False,
}


def _dotted(path: list[str]) -> str:
    return ".".join(path) or "<root>"


class TomlBuilder:
    """Converts nested mappings, sequences and scalars into a root :class:`Table`.

    Mappings become standalone tables, and a list holding only mappings becomes
    an array of tables. Anything nested inside other inline content (or every
    mapping, with ``inline_tables``) becomes an inline table instead. Nodes
    found in the input are copied, so the result never shares them with the caller.
    """

    def __init__(self, config: BuilderConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(config={"name": "builder", "is_enabled": self.config["enable_logger"]}).logger

    def build(self, tree: Mapping[str, Any]) -> Table:
        if not isinstance(tree, Mapping):
            raise TypeError("Root value must be a mapping")
        return self._convert_table(tree, path=[], inline=False)

    def _debug(self, message: str) -> None:
        if self.config["enable_logger"]:
            self.logger.debug(message)

    def _check_depth(self, path: list[str]) -> None:
        if len(path) > self.config["max_depth"]:
            raise NestingDepthError(f"Exceeded maximum nesting at '{_dotted(path)}'", len(path))

    def _convert_table(self, obj: Mapping[Any, Any], path: list[str], inline: bool) -> Table:
        self._check_depth(path)
        table = Table(is_inline=inline)
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Key {key!r} under '{_dotted(path)}' is not a string")
            child_path = [*path, key]
            table.entries[key] = self._convert_value(value, child_path, inline)
        return table

    def _convert_value(self, value: Any, path: list[str], inline: bool) -> Node:
        if isinstance(value, Node):
            return value.copy()
        if isinstance(value, Mapping):
            return self._convert_table(value, path, inline or self.config["inline_tables"])
        if isinstance(value, (list, tuple)):
            return self._convert_array(value, path, inline)
        return self._convert_scalar(value, path)

    def _convert_array(self, items: list[Any] | tuple[Any, ...], path: list[str], inline: bool) -> Array:
        self._check_depth(path)
        all_tables = bool(items) and all(isinstance(item, Mapping) for item in items)
        element_inline = inline or self.config["inline_tables"] or not all_tables
        array = Array()
        for idx, value in enumerate(items):
            child_path = [*path, str(idx)]
            array.elements.append(self._convert_value(value, child_path, element_inline))
        return array

    def _convert_scalar(self, value: Any, path: list[str]) -> Value:
        try:
            node = Value(value)
        except TypeError as exc:
            raise TypeError(f"Unsupported value at '{_dotted(path)}': {type(value).__name__}") from exc
        except ValueError as exc:
            raise ValueError(f"Invalid value at '{_dotted(path)}': {exc}") from exc
        self._debug(f"Converted '{_dotted(path)}' to {node.type.name.lower()}")
        return node


__all__ = ["TomlBuilder", "BuilderConfig"]
