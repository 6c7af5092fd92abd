# src/xcp/domain/exceptions/state.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Object State Exceptions.

Synopsis:
    Detailed errors for calls that are well-formed but not allowed given the
    current state of the receiving object.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from xcp.domain.exceptions.base import DataField, DetailedError

__all__ = ["OBJECT_KEY", "InvOpError", "ObjDisposedError"]

OBJECT_KEY = "Object"


class InvOpError(DetailedError):
    """The operation is not valid in the object's current state.

    Attributes:
        code: ``INVALID_OPERATION`` unless reassigned.
    """

    default_code = "INVALID_OPERATION"
    default_message = "Operation is not valid due to the current state of the object."


class ObjDisposedError(DetailedError):
    """An object was used after it had been closed or released.

    Attributes:
        code: ``OBJ_DISPOSED`` unless reassigned.
        object: Name or identifier of the disposed object.
    """

    default_code = "OBJ_DISPOSED"
    default_message = "The object has been disposed and cannot be used."

    object = DataField(OBJECT_KEY)
