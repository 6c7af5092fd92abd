# src/xcp/domain/exceptions/arguments.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Argument Exceptions.

Synopsis:
    Detailed errors raised when a caller passes an unusable argument. Each
    class presets a stable code and a default message and exposes the
    offending parameter name as a typed field.

Design:
    * Inherit from :class:`DetailedError` for consistent `.code` and rendering.
    * Extra fields are :class:`DataField` views, stored in ``data``.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from xcp.domain.exceptions.base import DataField, DetailedError

__all__ = [
    "PARAM_KEY",
    "ACTUAL_VALUE_KEY",
    "ArgError",
    "ArgNullError",
    "ArgOutOfRangeError",
]

PARAM_KEY = "Param"
ACTUAL_VALUE_KEY = "ActualValue"


class ArgError(DetailedError):
    """An argument has an invalid value.

    Attributes:
        code: ``ARG_ERROR`` unless reassigned.
        param: Name of the offending parameter.
    """

    default_code = "ARG_ERROR"
    default_message = "Invalid argument value"

    param = DataField(PARAM_KEY)


class ArgNullError(DetailedError):
    """A required argument was ``None``.

    Attributes:
        code: ``ARG_NULL`` unless reassigned.
        param: Name of the parameter that was ``None``.
    """

    default_code = "ARG_NULL"
    default_message = "Value cannot be null"

    param = DataField(PARAM_KEY)


class ArgOutOfRangeError(DetailedError):
    """An argument lies outside its range of valid values.

    Attributes:
        code: ``ARG_OUT_OF_RANGE`` unless reassigned.
        param: Name of the parameter that was out of range.
        actual_value: The rejected value, as text.
    """

    default_code = "ARG_OUT_OF_RANGE"
    default_message = "Specified argument was out of the range of valid values"

    param = DataField(PARAM_KEY)
    actual_value = DataField(ACTUAL_VALUE_KEY)
