"""
Context Model

Structured view of one analyzable syntactic unit.
Contexts are built by an external parser and only read here.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


class ContextType(Enum):
    MODULE           = "module"
    CLASS            = "class"
    METHOD           = "method"
    SINGLETON_METHOD = "singleton_method"


class ExpressionKind(Enum):
    TRUE  = "true"
    FALSE = "false"
    NIL   = "nil"
    INT   = "int"
    FLOAT = "float"
    STR   = "str"
    SYM   = "sym"
    ARRAY = "array"
    HASH  = "hash"
    CALL  = "call"
    OTHER = "other"


_BOOLEAN_KINDS = frozenset({ExpressionKind.TRUE, ExpressionKind.FALSE})


@dataclass(frozen=True)
class Expression:
    """A default-value expression. Only ``kind`` is consulted by detectors."""

    kind: ExpressionKind
    value: Optional[object] = None

    @property
    def is_boolean_literal(self) -> bool:
        """Literal true/false only, never a call that happens to return one."""
        return self.kind in _BOOLEAN_KINDS


@dataclass(frozen=True)
class CodeContext:
    """
    One method, class or module under analysis.

    default_assignments maps parameter name -> default expression, in
    declaration order, and only holds parameters that declare a default.
    """
    type: ContextType
    declaration_line: int
    default_assignments: Mapping[str, Expression] = field(default_factory=dict)
    full_name: str = ""
    source: str = "string"

    def __post_init__(self):
        if not isinstance(self.type, ContextType):
            object.__setattr__(self, "type", ContextType(self.type))
        object.__setattr__(
            self,
            "default_assignments",
            MappingProxyType(dict(self.default_assignments)),
        )

    def matches(self, candidates: Iterable[str | re.Pattern]) -> bool:
        """
        Check whether any candidate names this context.

        Compiled patterns and "/pattern/" strings are searched as regular
        expressions, anything else as a plain substring of full_name.
        """
        for candidate in map(name_pattern, candidates):
            if isinstance(candidate, re.Pattern):
                if candidate.search(self.full_name):
                    return True
            elif candidate in self.full_name:
                return True
        return False


def name_pattern(candidate: str | re.Pattern) -> str | re.Pattern:
    """Compile a "/pattern/" candidate; plain strings stay substrings."""
    if isinstance(candidate, str) and len(candidate) > 1 \
            and candidate.startswith("/") and candidate.endswith("/"):
        return re.compile(candidate[1:-1])
    return candidate
