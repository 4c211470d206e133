"""Exceptions raised by the document model and the formatter."""

from __future__ import annotations


class TomlCoreError(Exception):
    pass


class NestingDepthError(TomlCoreError):
    def __init__(self, message: str, depth: int):
        self.message = message
        self.depth = depth
        super().__init__(f"{message} (depth {depth})")
