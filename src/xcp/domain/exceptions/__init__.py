"""
Detailed exception package export.

Keeps import sites clean and stable:
    from xcp.domain.exceptions import ArgNullError, DetailedError
"""

from __future__ import annotations

from .arguments import ArgError, ArgNullError, ArgOutOfRangeError
from .base import DataField, DetailedError
from .state import InvOpError, ObjDisposedError

__all__ = [
    "ArgError",
    "ArgNullError",
    "ArgOutOfRangeError",
    "DataField",
    "DetailedError",
    "InvOpError",
    "ObjDisposedError",
]
