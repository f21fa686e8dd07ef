"""GitHub integration modules."""

from .sarif_generator import SARIFGenerator

__all__ = [
    "SARIFGenerator",
]
