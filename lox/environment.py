from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping

from lox.errors import ErrorKind, LoxRuntimeError
from lox.tokens import Token


class Environment:
    """Variable storage as a stack of scope frames.

    Frame 0 holds the globals and lives as long as the environment. Every
    block pushes one frame through :meth:`scope` and pops it when the block
    is left, whether normally or by an exception. Lookups and assignments
    search from the innermost frame outward.
    """
    def __init__(self):
        self.frames: List[Dict[str, Any]] = [{}]

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def globals(self) -> Mapping[str, Any]:
        return MappingProxyType(self.frames[0])

    @contextmanager
    def scope(self) -> Iterator['Environment']:
        self.frames.append({})
        try:
            yield self
        finally:
            self.frames.pop()

    def define(self, name: str, value: Any):
        # rebinding in the same frame is allowed
        self.frames[-1][name] = value

    def get(self, name: Token) -> Any:
        for frame in reversed(self.frames):
            if name.lexeme in frame:
                return frame[name.lexeme]
        raise LoxRuntimeError(ErrorKind.UNDEFINED_VARIABLE, name,
                              f"Undefined variable '{name.lexeme}'.")

    def assign(self, name: str, value: Any) -> bool:
        for frame in reversed(self.frames):
            if name in frame:
                frame[name] = value
                return True
        return False
