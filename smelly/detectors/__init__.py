"""
Smell Detector Contract

Every detector answers: "Which smells does this context have?"

Design principles:
- One instance per detector type, configured once
- Stateless across contexts (sniff is a pure function of context + config)
- Detectors declare which context types they understand
- Identity is the class name, used for filtering and config lookup

Registration:
- Concrete detectors are decorated with @register
- The table is filled once at import time and only read afterwards
"""
from typing import Any, Dict, List, Mapping, Tuple, Type

from ..config import DetectorConfig, resolve_detector_config
from ..context import CodeContext, ContextType
from ..warnings import SmellWarning


class BaseDetector:
    """
    Base class for all smell detectors.

    Subclasses implement sniff() and may narrow `contexts`.
    """
    contexts: Tuple[ContextType, ...] = (ContextType.METHOD, ContextType.SINGLETON_METHOD)

    def __init__(self, config: DetectorConfig | Mapping[str, Any] | None = None):
        self.config = resolve_detector_config(config, self.default_config())

    @classmethod
    def smell_type(cls) -> str:
        return cls.__name__

    @classmethod
    def default_config(cls) -> Dict[str, Any]:
        return {"enabled": True, "exclude": []}

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def applies_to(self, context: CodeContext) -> bool:
        return context.type in self.contexts

    def excludes(self, context: CodeContext) -> bool:
        return context.matches(self.config.exclude_patterns)

    def sniff(self, context: CodeContext) -> List[SmellWarning]:
        """Return the smells found in context. Must not mutate it."""
        raise NotImplementedError(f"{self.smell_type()} does not implement sniff()")

    def run_for(self, context: CodeContext) -> List[SmellWarning]:
        """sniff() guarded by enablement, applicability and exclusions."""
        if not self.enabled or not self.applies_to(context):
            return []
        if self.excludes(context):
            return []
        return list(self.sniff(context))

    def smell_warning(
        self,
        context: CodeContext,
        lines: List[int],
        message: str,
        parameters: Mapping[str, str] | None = None,
    ) -> SmellWarning:
        return SmellWarning(
            smell_type=self.smell_type(),
            context=context.full_name,
            lines=tuple(lines),
            message=message,
            parameters=parameters or {},
            source=context.source,
        )

    def __repr__(self) -> str:
        return f"{self.smell_type()}(enabled={self.enabled})"


_REGISTRY: Dict[str, Type[BaseDetector]] = {}


def register(cls: Type[BaseDetector]) -> Type[BaseDetector]:
    """Class decorator: add a detector type to the registry."""
    name = cls.smell_type()
    existing = _REGISTRY.get(name)
    if existing is not None and existing is not cls:
        raise ValueError(f"Detector '{name}' is already registered")
    _REGISTRY[name] = cls
    return cls


def smell_types() -> List[Type[BaseDetector]]:
    """All registered detector types, ordered by identity name."""
    return [_REGISTRY[name] for name in sorted(_REGISTRY)]


def is_registered(name: str) -> bool:
    return name in _REGISTRY


# Import all detectors so they register themselves
from .boolean_parameter import BooleanParameter

__all__ = [
    'BaseDetector',
    'BooleanParameter',
    'register',
    'smell_types',
    'is_registered',
]
