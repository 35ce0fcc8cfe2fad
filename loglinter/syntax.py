"""
Expression tree representation for Go source.

Only the shapes the checks look at are modeled precisely; everything
else becomes an OtherExpr with a span.

Positions are byte offsets into the file's source. All nodes are
immutable and compared by identity, so an occurrence can key a
use-to-declaration map.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Tuple

from .binding import TypeInfo


class Token(Enum):
    # Literal kinds
    INT    = "INT"
    FLOAT  = "FLOAT"
    IMAG   = "IMAG"
    CHAR   = "CHAR"
    STRING = "STRING"

    # Operators
    ADD     = "+"
    SUB     = "-"
    MUL     = "*"
    QUO     = "/"
    REM     = "%"
    AND     = "&"
    OR      = "|"
    XOR     = "^"
    SHL     = "<<"
    SHR     = ">>"
    AND_NOT = "&^"
    LAND    = "&&"
    LOR     = "||"
    ARROW   = "<-"
    EQL     = "=="
    NEQ     = "!="
    LSS     = "<"
    LEQ     = "<="
    GTR     = ">"
    GEQ     = ">="
    NOT     = "!"
    ILLEGAL = "ILLEGAL"

    @classmethod
    def from_operator(cls, text: str) -> "Token":
        try:
            token = cls(text)
        except ValueError:
            return cls.ILLEGAL
        if token in _LITERAL_KINDS:
            return cls.ILLEGAL
        return token


_LITERAL_KINDS = {Token.INT, Token.FLOAT, Token.IMAG, Token.CHAR, Token.STRING}


class Expr(ABC):
    """Base class for expression nodes."""

    @property
    @abstractmethod
    def pos(self) -> int:
        ...

    @property
    @abstractmethod
    def end(self) -> int:
        ...


@dataclass(frozen=True, eq=False)
class Ident(Expr):
    name: str
    name_pos: int = 0

    @property
    def pos(self) -> int:
        return self.name_pos

    @property
    def end(self) -> int:
        return self.name_pos + len(self.name.encode("utf-8"))


@dataclass(frozen=True, eq=False)
class BasicLit(Expr):
    """A literal of basic type. `value` is the raw source text, quotes included."""
    kind: Token
    value: str
    value_pos: int = 0

    @property
    def pos(self) -> int:
        return self.value_pos

    @property
    def end(self) -> int:
        return self.value_pos + len(self.value.encode("utf-8"))


@dataclass(frozen=True, eq=False)
class BinaryExpr(Expr):
    x: Expr
    op: Token
    y: Expr

    @property
    def pos(self) -> int:
        return self.x.pos

    @property
    def end(self) -> int:
        return self.y.end


@dataclass(frozen=True, eq=False)
class UnaryExpr(Expr):
    op: Token
    x: Expr
    op_pos: int = 0

    @property
    def pos(self) -> int:
        return self.op_pos

    @property
    def end(self) -> int:
        return self.x.end


@dataclass(frozen=True, eq=False)
class ParenExpr(Expr):
    x: Expr
    lparen: int = 0
    rparen: int = 0

    @property
    def pos(self) -> int:
        return self.lparen

    @property
    def end(self) -> int:
        return self.rparen + 1


@dataclass(frozen=True, eq=False)
class SelectorExpr(Expr):
    """receiver.Sel"""
    x: Expr
    sel: Ident

    @property
    def pos(self) -> int:
        return self.x.pos

    @property
    def end(self) -> int:
        return self.sel.end


@dataclass(frozen=True, eq=False)
class CallExpr(Expr):
    fun: Expr
    args: Tuple[Expr, ...] = ()
    rparen: int = 0

    @property
    def pos(self) -> int:
        return self.fun.pos

    @property
    def end(self) -> int:
        return self.rparen + 1


@dataclass(frozen=True, eq=False)
class OtherExpr(Expr):
    """Any expression shape the checks do not inspect (index, func literal, ...)."""
    kind: str
    start: int = 0
    stop: int = 0

    @property
    def pos(self) -> int:
        return self.start

    @property
    def end(self) -> int:
        return self.stop


@dataclass(frozen=True)
class File:
    """
    One analysis unit: a parsed Go source file.

    `calls` holds every call expression of the file, outermost first,
    in source order. `type_info` resolves identifier occurrences found
    in those calls.
    """
    path: Path
    source: bytes
    package: str
    calls: List[CallExpr]
    type_info: TypeInfo = field(default_factory=TypeInfo)

    def position(self, offset: int) -> Tuple[int, int]:
        """Translate a byte offset into a 1-based (line, column) pair."""
        prefix = self.source[:offset]
        line = prefix.count(b"\n") + 1
        column = offset - (prefix.rfind(b"\n") + 1) + 1
        return line, column
