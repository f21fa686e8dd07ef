"""LeakGuard - hardcoded credential leak scanner."""

from .version import VERSION

__version__ = VERSION
