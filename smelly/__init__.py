"""
smelly - pluggable code smell detectors.

Feed structured contexts to a DetectorRepository, get SmellWarnings back.
"""
from .config import ConfigError, DetectorConfig, load_config
from .context import CodeContext, ContextType, Expression, ExpressionKind
from .detectors import BaseDetector, BooleanParameter, register
from .repository import DetectorRepository
from .warnings import SmellWarning, sort_warnings

__all__ = [
    'BaseDetector',
    'BooleanParameter',
    'CodeContext',
    'ConfigError',
    'ContextType',
    'DetectorConfig',
    'DetectorRepository',
    'Expression',
    'ExpressionKind',
    'SmellWarning',
    'load_config',
    'register',
    'sort_warnings',
]
