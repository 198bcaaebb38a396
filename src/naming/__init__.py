"""Name translation policies."""

from naming.translator import (
    BUILTIN_TYPE_NAMES,
    MarkerAwareTranslator,
    NameBasedTranslator,
    NameTranslator,
)

__all__ = [
    "BUILTIN_TYPE_NAMES",
    "MarkerAwareTranslator",
    "NameBasedTranslator",
    "NameTranslator",
]
