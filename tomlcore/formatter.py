"""Formatter that writes a node tree back out as document text."""

from __future__ import annotations

import io
import math
from contextlib import contextmanager
from enum import Flag
from typing import Any, Iterator, NotRequired, Protocol, TypedDict, assert_never

from .array import Array
from .encoders import (
    ValueFormat,
    encode_bool,
    encode_date,
    encode_date_time,
    encode_float,
    encode_integer,
    encode_time,
    quote_string,
)
from .errors import NestingDepthError
from .logger import Logger
from .nodes import MAX_NESTED_VALUES, Node, NodeType, Value
from .parse_result import ParseResult
from .table import Table
from .utils import resolve_config

LINE_WRAP_COLS = 120

_INTEGER_PREFIXES = {
    ValueFormat.BINARY: "0b",
    ValueFormat.OCTAL: "0o",
    ValueFormat.HEXADECIMAL: "0x",
}


class FormatFlags(Flag):
    NONE = 0
    ALLOW_LITERAL_STRINGS = 1
    ALLOW_MULTI_LINE_STRINGS = 2
    ALLOW_VALUE_FORMAT_FLAGS = 4
    INDENT_SUB_TABLES = 8
    INDENT_ARRAY_ELEMENTS = 16
    INDENTATION = INDENT_SUB_TABLES | INDENT_ARRAY_ELEMENTS


DEFAULT_FLAGS = (
    FormatFlags.ALLOW_LITERAL_STRINGS
    | FormatFlags.ALLOW_MULTI_LINE_STRINGS
    | FormatFlags.ALLOW_VALUE_FORMAT_FLAGS
    | FormatFlags.INDENTATION
)


class TextSink(Protocol):
    def write(self, text: str, /) -> Any: ...


class FormatterConfig(TypedDict):
    flags: NotRequired[FormatFlags]
    indent: NotRequired[str]
    max_depth: NotRequired[int]
    enable_logger: NotRequired[bool]


class FormatterConfigRequired(TypedDict):
    flags: FormatFlags
    indent: str
    max_depth: int
    enable_logger: bool


DEFAULT_CONFIG: FormatterConfigRequired = {
    "flags": DEFAULT_FLAGS,
    "indent": "    ",
    "max_depth": MAX_NESTED_VALUES,
    "enable_logger": False,
}


def count_inline_columns(node: Node, max_depth: int = MAX_NESTED_VALUES, _depth: int = 0) -> int:
    """Rough upper bound of the columns ``node`` takes when printed inline.

    Containers stop adding up their children once the running total reaches
    the wrap width, so this never walks far past what is needed to decide.
    """
    if _depth > max_depth:
        raise NestingDepthError("Exceeded maximum nesting while measuring", _depth)

    node_type = node.type
    if node_type is NodeType.TABLE:
        tbl: Table = node  # type: ignore[assignment]
        if not tbl.entries:
            return 2  # "{}"
        weight = 3  # "{ }"
        for key, child in tbl.entries.items():
            weight += len(key) + count_inline_columns(child, max_depth, _depth + 1) + 2  # ", "
            if weight >= LINE_WRAP_COLS:
                break
        return weight

    if node_type is NodeType.ARRAY:
        arr: Array = node  # type: ignore[assignment]
        if not arr.elements:
            return 2  # "[]"
        weight = 3  # "[ ]"
        for elem in arr.elements:
            weight += count_inline_columns(elem, max_depth, _depth + 1) + 2  # ", "
            if weight >= LINE_WRAP_COLS:
                break
        return weight

    value = node.value  # type: ignore[attr-defined]
    if node_type is NodeType.STRING:
        return len(value) + 2  # quotes
    if node_type is NodeType.INTEGER:
        if not value:
            return 1
        return (1 if value < 0 else 0) + len(str(abs(value)))
    if node_type is NodeType.FLOAT:
        if value == 0.0:
            return 3  # "0.0"
        if not math.isfinite(value):
            return len(encode_float(value))
        weight = 2  # ".0"
        if value < 0.0:
            weight += 1
            value = -value
        return weight + max(int(math.log10(value)), 0) + 1
    if node_type is NodeType.BOOLEAN:
        return 5
    if node_type is NodeType.DATE or node_type is NodeType.TIME:
        return 10
    if node_type is NodeType.DATE_TIME:
        return 30
    assert_never(node_type)


def forces_multiline(node: Node, starting_column_bias: int = 0, max_depth: int = MAX_NESTED_VALUES) -> bool:
    return count_inline_columns(node, max_depth) + starting_column_bias >= LINE_WRAP_COLS


def _is_non_inline_array_of_tables(node: Node) -> bool:
    arr = node.as_array()
    return arr is not None and arr.is_array_of_tables() and not arr.elements[0].is_inline  # type: ignore[attr-defined]


class TomlFormatter:
    """Prints a node (or a failed parse result) as document text.

    Non-inline tables are laid out in three passes: plain key/value pairs
    first, then sub-table sections, then arrays of tables, since every pair
    of a table has to come before its first nested header.
    """

    def __init__(self, source: Node | ParseResult, config: FormatterConfig | None = None):
        self.source = source
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.flags: FormatFlags = self.config["flags"]
        self.indent_string: str = self.config["indent"]
        self.indent_columns = sum(4 if c == "\t" else 1 for c in self.indent_string)
        self.max_depth: int = self.config["max_depth"]
        self.logger = Logger(config={"name": "formatter", "is_enabled": self.config["enable_logger"]}).logger

        self._stream: TextSink | None = None
        self._indent = 0
        self._depth = 0
        self._naked_newline = True
        self._pending_table_separator = False
        self._key_path: list[str] = []

    # Public API ------------------------------------------------------------------

    def write_to(self, stream: TextSink) -> None:
        self._stream = stream
        self._indent = 0
        self._depth = 0
        self._naked_newline = True
        self._pending_table_separator = False
        self._key_path.clear()
        try:
            self._print()
        finally:
            self._stream = None

    def format(self) -> str:
        buffer = io.StringIO()
        self.write_to(buffer)
        return buffer.getvalue()

    def __str__(self) -> str:
        return self.format()

    # Stream primitives -----------------------------------------------------------

    def _write(self, text: str) -> None:
        assert self._stream is not None
        self._stream.write(text)

    def _print_newline(self, force: bool = False) -> None:
        if not self._naked_newline or force:
            self._write("\n")
            self._naked_newline = True

    def _print_indent(self) -> None:
        for _ in range(self._indent):
            self._write(self.indent_string)
            self._naked_newline = False

    def _print_pending_table_separator(self) -> None:
        if self._pending_table_separator:
            self._print_newline(True)
            self._print_newline(True)
            self._pending_table_separator = False

    def _debug(self, message: str) -> None:
        if self.config["enable_logger"]:
            self.logger.debug(message)

    def _has(self, flag: FormatFlags) -> bool:
        return bool(self.flags & flag)

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self._depth += 1
        if self._depth > self.max_depth:
            raise NestingDepthError("Exceeded maximum nesting while formatting", self._depth)
        try:
            yield
        finally:
            self._depth -= 1

    # Keys and scalars ---------------------------------------------------------------

    def _print_key_segment(self, key: str) -> None:
        self._write(quote_string(key, literal_allowed=self._has(FormatFlags.ALLOW_LITERAL_STRINGS), bare_allowed=True))

    def _print_key_path(self) -> None:
        for i, segment in enumerate(self._key_path):
            if i:
                self._write(".")
            self._print_key_segment(segment)
        self._naked_newline = False

    def _print_value(self, node: Value) -> None:
        node_type = node.type
        value = node.value
        if node_type is NodeType.STRING:
            text = quote_string(
                value,  # type: ignore[arg-type]
                literal_allowed=self._has(FormatFlags.ALLOW_LITERAL_STRINGS),
                multi_line_allowed=self._has(FormatFlags.ALLOW_MULTI_LINE_STRINGS),
            )
        elif node_type is NodeType.INTEGER:
            if self._has(FormatFlags.ALLOW_VALUE_FORMAT_FLAGS) and node.flags is not ValueFormat.NONE and value >= 0:  # type: ignore[operator]
                text = _INTEGER_PREFIXES[node.flags] + encode_integer(value, node.flags)  # type: ignore[arg-type]
            else:
                text = encode_integer(value)  # type: ignore[arg-type]
        elif node_type is NodeType.FLOAT:
            text = encode_float(value)  # type: ignore[arg-type]
        elif node_type is NodeType.BOOLEAN:
            text = encode_bool(value)  # type: ignore[arg-type]
        elif node_type is NodeType.DATE:
            text = encode_date(value)  # type: ignore[arg-type]
        elif node_type is NodeType.TIME:
            text = encode_time(value)  # type: ignore[arg-type]
        elif node_type is NodeType.DATE_TIME:
            text = encode_date_time(value)  # type: ignore[arg-type]
        elif node_type is NodeType.TABLE or node_type is NodeType.ARRAY:
            raise AssertionError(f"{node_type.name.lower()} is not a scalar value")
        else:
            assert_never(node_type)
        self._write(text)
        self._naked_newline = False

    def _print_inline_node(self, node: Node) -> None:
        table = node.as_table()
        if table is not None:
            self._print_inline_table(table)
            return
        array = node.as_array()
        if array is not None:
            self._print_array(array)
            return
        self._print_value(node)  # type: ignore[arg-type]

    # Containers -------------------------------------------------------------------

    def _print_inline_table(self, tbl: Table) -> None:
        with self._nested():
            if not tbl.entries:
                self._write("{}")
            else:
                self._write("{ ")
                for i, (key, child) in enumerate(tbl.entries.items()):
                    if i:
                        self._write(", ")
                    self._print_key_segment(key)
                    self._write(" = ")
                    self._print_inline_node(child)
                self._write(" }")
        self._naked_newline = False

    def _print_array(self, arr: Array) -> None:
        with self._nested():
            if not arr.elements:
                self._write("[]")
            else:
                original_indent = self._indent
                multiline = forces_multiline(arr, self.indent_columns * max(original_indent, 0), self.max_depth)
                self._write("[")
                if multiline:
                    self._debug(f"Wrapping array of {len(arr.elements)} element(s) over multiple lines")
                    if original_indent < 0:
                        self._indent = 0
                    if self._has(FormatFlags.INDENT_ARRAY_ELEMENTS):
                        self._indent += 1
                else:
                    self._write(" ")

                for i, elem in enumerate(arr.elements):
                    if i:
                        self._write(",")
                        if not multiline:
                            self._write(" ")
                    if multiline:
                        self._print_newline(True)
                        self._print_indent()
                    self._print_inline_node(elem)

                if multiline:
                    self._indent = original_indent
                    self._print_newline(True)
                    self._print_indent()
                else:
                    self._write(" ")
                self._write("]")
        self._naked_newline = False

    def _print_table(self, tbl: Table) -> None:
        with self._nested():
            self._print_table_values(tbl)
            self._print_sub_tables(tbl)
            self._print_table_arrays(tbl)

    def _print_table_values(self, tbl: Table) -> None:
        for key, child in tbl.entries.items():
            sub_table = child.as_table()
            if (sub_table is not None and not sub_table.is_inline) or _is_non_inline_array_of_tables(child):
                continue

            self._pending_table_separator = True
            self._print_newline()
            self._print_indent()
            self._print_key_segment(key)
            self._write(" = ")
            self._print_inline_node(child)

    def _print_sub_tables(self, tbl: Table) -> None:
        for key, child in tbl.entries.items():
            child_tbl = child.as_table()
            if child_tbl is None or child_tbl.is_inline:
                continue

            # a table holding nothing but other sections gets no header of its own
            child_value_count = 0
            child_table_count = 0
            child_table_array_count = 0
            for grandchild in child_tbl.entries.values():
                grandchild_tbl = grandchild.as_table()
                if grandchild_tbl is not None:
                    if grandchild_tbl.is_inline:
                        child_value_count += 1
                    else:
                        child_table_count += 1
                elif _is_non_inline_array_of_tables(grandchild):
                    child_table_array_count += 1
                else:
                    child_value_count += 1
            skip_self = child_value_count == 0 and (child_table_count > 0 or child_table_array_count > 0)

            self._key_path.append(key)

            if skip_self:
                self._debug(f"Suppressing header for [{'.'.join(self._key_path)}]")
            else:
                self._print_pending_table_separator()
                if self._has(FormatFlags.INDENT_SUB_TABLES):
                    self._indent += 1
                self._print_indent()
                self._write("[")
                self._print_key_path()
                self._write("]")
                self._pending_table_separator = True
                self._debug(f"Emitted header [{'.'.join(self._key_path)}]")

            self._print_table(child_tbl)

            self._key_path.pop()
            if not skip_self and self._has(FormatFlags.INDENT_SUB_TABLES):
                self._indent -= 1

    def _print_table_arrays(self, tbl: Table) -> None:
        for key, child in tbl.entries.items():
            if not _is_non_inline_array_of_tables(child):
                continue
            arr: Array = child  # type: ignore[assignment]

            if self._has(FormatFlags.INDENT_SUB_TABLES):
                self._indent += 1
            self._key_path.append(key)
            self._debug(f"Emitting {len(arr.elements)} [[{'.'.join(self._key_path)}]] section(s)")

            for elem in arr.elements:
                self._print_pending_table_separator()
                self._print_indent()
                self._write("[[")
                self._print_key_path()
                self._write("]]")
                self._pending_table_separator = True
                self._print_table(elem)  # type: ignore[arg-type]

            self._key_path.pop()
            if self._has(FormatFlags.INDENT_SUB_TABLES):
                self._indent -= 1

    # Entry point ------------------------------------------------------------------

    def _print(self) -> None:
        source = self.source
        if isinstance(source, ParseResult):
            if source.error is not None:
                self._debug("Source is a failed parse result; writing its diagnostic")
                self._write(str(source.error))
                return
            source = source.table

        self._debug(f"Formatting {source.type.name.lower()} node")
        source_type = source.type
        if source_type is NodeType.TABLE:
            tbl: Table = source  # type: ignore[assignment]
            if tbl.is_inline:
                self._print_inline_table(tbl)
            else:
                # root pairs and first-level headers share the outermost column
                self._indent -= 1
                self._print_table(tbl)
                self._indent += 1
                self._print_newline()
        elif source_type is NodeType.ARRAY:
            self._print_array(source)  # type: ignore[arg-type]
        else:
            self._print_value(source)  # type: ignore[arg-type]


def dumps(source: Node | ParseResult, config: FormatterConfig | None = None) -> str:
    return TomlFormatter(source, config).format()


def dump(source: Node | ParseResult, stream: TextSink, config: FormatterConfig | None = None) -> None:
    TomlFormatter(source, config).write_to(stream)
