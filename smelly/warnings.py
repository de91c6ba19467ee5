"""
Smell Warnings

Immutable findings produced by detectors and handed to reporters.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple


@dataclass(frozen=True)
class SmellWarning:
    smell_type: str
    context:    str
    lines:      Tuple[int, ...]
    message:    str
    parameters: Mapping[str, str] = field(default_factory=dict)
    source:     str = "string"

    def __post_init__(self):
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def sort_key(self) -> tuple:
        return (self.smell_type, self.context, self.message, self.lines)

    def to_dict(self) -> dict:
        """Plain-data shape for reporters."""
        return {
            "smell_type": self.smell_type,
            "context":    self.context,
            "lines":      list(self.lines),
            "message":    self.message,
            "source":     self.source,
            "parameters": dict(self.parameters),
        }


def sort_warnings(warnings: Iterable[SmellWarning]) -> List[SmellWarning]:
    return sorted(warnings, key=lambda w: w.sort_key)
