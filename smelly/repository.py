"""
Detector Repository

Owns one configured instance per detector type and routes each
context to the enabled detectors that understand its type.
No analysis here, only selection and aggregation.
"""
import logging
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Type

from .config import DetectorConfig
from .context import CodeContext, ContextType
from .detectors import BaseDetector
from .detectors import smell_types as registered_smell_types
from .warnings import SmellWarning

logger = logging.getLogger(__name__)


class DetectorRepository:
    """All known smell detectors and the operations over them."""

    @staticmethod
    def smell_types() -> List[Type[BaseDetector]]:
        return registered_smell_types()

    @staticmethod
    def eligible_smell_types(filter_by_smells: Iterable[str] = ()) -> List[Type[BaseDetector]]:
        """
        Down-select detector types by identity name.

        An empty filter means no filtering. Names that match no
        detector are ignored. A single name may be passed as a string.
        """
        if isinstance(filter_by_smells, str):
            filter_by_smells = [filter_by_smells]
        wanted = set(filter_by_smells)
        all_types = registered_smell_types()
        if not wanted:
            return all_types
        return [klass for klass in all_types if klass.smell_type() in wanted]

    def __init__(
        self,
        smell_types: Sequence[Type[BaseDetector]] | None = None,
        configuration: Mapping[str, DetectorConfig | Mapping[str, Any]] | None = None,
    ):
        if smell_types is None:
            smell_types = registered_smell_types()
        self._configuration = dict(configuration or {})
        self._smell_types = tuple(smell_types)
        self._detectors: Tuple[BaseDetector, ...] = tuple(
            klass(self._configuration_for(klass)) for klass in self._smell_types
        )

        disabled = [d.smell_type() for d in self._detectors if not d.enabled]
        logger.debug(
            "Built %d detector(s); disabled: %s",
            len(self._detectors),
            ", ".join(disabled) or "none",
        )

    @property
    def detectors(self) -> Tuple[BaseDetector, ...]:
        return self._detectors

    def examine(self, context: CodeContext) -> List[SmellWarning]:
        """
        Run every applicable, enabled detector on context.

        Warnings keep detector order, then each detector's own order.
        Detector errors propagate.
        """
        warnings: List[SmellWarning] = []
        for detector in self._detectors_for(context.type):
            warnings.extend(detector.run_for(context))
        return warnings

    def _configuration_for(self, klass: Type[BaseDetector]):
        return self._configuration.get(klass.smell_type(), {})

    def _detectors_for(self, context_type: ContextType) -> List[BaseDetector]:
        return [
            detector for detector in self._enabled_detectors()
            if context_type in detector.contexts
        ]

    def _enabled_detectors(self) -> List[BaseDetector]:
        return [detector for detector in self._detectors if detector.enabled]
