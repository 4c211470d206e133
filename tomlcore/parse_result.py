"""The tagged result a parser hands over: either a built table or a diagnostic."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .errors import TomlCoreError
from .table import Table


class SourcePosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    line: int = Field(default=0, ge=0)
    column: int = Field(default=0, ge=0)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class SourceRegion(BaseModel):
    model_config = ConfigDict(frozen=True)

    begin: SourcePosition = Field(default_factory=SourcePosition)
    end: SourcePosition = Field(default_factory=SourcePosition)
    path: str | None = None

    def __str__(self) -> str:
        text = str(self.begin)
        if self.path:
            text += f" of '{self.path}'"
        return text


class ParseError(TomlCoreError):
    def __init__(self, description: str, source: SourceRegion | None = None):
        self.description = description
        self.source = source or SourceRegion()
        super().__init__(description)

    def __str__(self) -> str:
        return f"{self.description}\n\t(error occurred at {self.source})"


class ParseResult:
    """Holds exactly one of a parsed :class:`Table` or a :class:`ParseError`."""

    def __init__(self, result: Table | ParseError):
        if not isinstance(result, (Table, ParseError)):
            raise TypeError(f"ParseResult holds a Table or a ParseError, not {type(result).__name__}")
        self._result = result

    @property
    def succeeded(self) -> bool:
        return isinstance(self._result, Table)

    @property
    def failed(self) -> bool:
        return not self.succeeded

    @property
    def table(self) -> Table:
        if isinstance(self._result, ParseError):
            raise self._result
        return self._result

    @property
    def error(self) -> ParseError | None:
        return self._result if isinstance(self._result, ParseError) else None

    def __bool__(self) -> bool:
        return self.succeeded

    def __repr__(self) -> str:
        return f"ParseResult({self._result!r})"
