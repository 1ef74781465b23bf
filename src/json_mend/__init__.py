"""json-mend: Repair JSON-like text into strict JSON, or show exactly where it breaks.

Handles comments, trailing commas, unquoted keys, single quotes, Python
literals and exotic numbers.

Basic usage:
    >>> from json_mend import repair
    >>> repair("{name: 'nate', tags: ['a', 'b',],}")
    '{"name": "nate", "tags": ["a", "b"]}'

With metadata:
    >>> from json_mend import process
    >>> result = process("{active: True}")
    >>> print(result.ok, result.value, result.passes)
    True {'active': True} 1

Diagnosing broken input:
    >>> result = process('{"a": 1,,"b": 2}')
    >>> result.ok, result.diagnostic.kind.value, result.diagnostic.position
    (False, 'structural_comma', Position(line=1, col=9))
"""

from .parser import describe, loads, process
from .repair import repair
from .types import (
    Cause,
    Diagnostic,
    ErrorKind,
    Position,
    RepairError,
    RepairResult,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "repair",
    "process",
    "loads",
    "describe",
    # Types
    "RepairResult",
    "Diagnostic",
    "Position",
    "ErrorKind",
    "Cause",
    "RepairError",
    # Metadata
    "__version__",
]
