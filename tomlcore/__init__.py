"""Document model and canonical formatter for TOML-style configuration documents."""

from .array import Array
from .builder import BuilderConfig, TomlBuilder
from .date_time import Date, DateTime, Time, TimeOffset
from .encoders import ValueFormat
from .errors import NestingDepthError, TomlCoreError
from .formatter import (
    DEFAULT_FLAGS,
    LINE_WRAP_COLS,
    FormatFlags,
    FormatterConfig,
    TomlFormatter,
    count_inline_columns,
    dump,
    dumps,
    forces_multiline,
)
from .nodes import MAX_NESTED_VALUES, Node, NodeType, Value, deep_equal, make_node
from .parse_result import ParseError, ParseResult, SourcePosition, SourceRegion
from .table import Table

__all__ = [
    "Array",
    "BuilderConfig",
    "TomlBuilder",
    "Date",
    "DateTime",
    "Time",
    "TimeOffset",
    "ValueFormat",
    "NestingDepthError",
    "TomlCoreError",
    "DEFAULT_FLAGS",
    "LINE_WRAP_COLS",
    "FormatFlags",
    "FormatterConfig",
    "TomlFormatter",
    "count_inline_columns",
    "dump",
    "dumps",
    "forces_multiline",
    "MAX_NESTED_VALUES",
    "Node",
    "NodeType",
    "Value",
    "deep_equal",
    "make_node",
    "ParseError",
    "ParseResult",
    "SourcePosition",
    "SourceRegion",
    "Table",
]
