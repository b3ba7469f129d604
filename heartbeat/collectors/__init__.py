from .base import MetricsSource
from .psutil_source import PsutilSource

__all__ = [
    "MetricsSource",
    "PsutilSource",
]
