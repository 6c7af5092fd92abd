# src/xcp/domain/exceptions/base.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Base Detailed Exceptions.

Summary:
    Canonical base class for structured errors. A :class:`DetailedError`
    carries a machine-readable code, an origin label (context, member, line),
    an ordered mapping of extra data and an explicit cause, and renders itself
    together with its whole cause chain.

Design:
    * Reserved fields are :class:`DataField` views over ``data``; there is no
      separate storage, so insertion order is render order.
    * Variants are one-level subclasses that only preset ``default_code`` and
      ``default_message`` and declare extra fields.
    * The cause lives in ``__cause__`` so ``raise ... from ...`` and the
      standard :mod:`traceback` machinery see the same chain.

Layer:
    domain/exceptions
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from typing import Any, ClassVar, Self, overload

__all__ = [
    "CODE_KEY",
    "CONTEXT_KEY",
    "MEMBER_KEY",
    "LINE_KEY",
    "DataField",
    "DetailedError",
]

CODE_KEY = "Code"
CONTEXT_KEY = "Context"
MEMBER_KEY = "Member"
LINE_KEY = "Line"


class DataField:
    """Typed accessor over one reserved key of :attr:`DetailedError.data`.

    Reading an unset key yields ``None``. Assigning stores the value as-is
    (including ``None``); deleting removes the key.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        self.name = key

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    @overload
    def __get__(self, instance: None, owner: type | None = None) -> DataField: ...

    @overload
    def __get__(self, instance: DetailedError, owner: type | None = None) -> Any: ...

    def __get__(self, instance: DetailedError | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.data.get(self.key)

    def __set__(self, instance: DetailedError, value: Any) -> None:
        instance.data[self.key] = value

    def __delete__(self, instance: DetailedError) -> None:
        instance.data.pop(self.key, None)

    def __repr__(self) -> str:
        return f"DataField({self.key!r})"


class DetailedError(Exception):
    """Base class for all structured errors.

    ``str(err)`` is the message alone. The full text form, with the data
    block, the cause chain and the captured traces, comes from
    :meth:`render`; in logs, :class:`~xcp.infrastructure.logging.logger.DetailedErrorFormatter`
    and the JSON ``exc_detail`` key carry the same rendering.

    Attributes:
        default_code:
            Code stored under ``"Code"`` at construction, or ``None`` to leave
            it unset. Variants override this.
        default_message:
            Message used when the caller omits one. ``None`` makes the message
            mandatory.
        data:
            Ordered extra data. Reserved fields and caller-supplied keys share
            this mapping; insertion order is the order shown by :meth:`render`.
    """

    default_code: ClassVar[str | None] = None
    default_message: ClassVar[str | None] = None

    code = DataField(CODE_KEY)
    context = DataField(CONTEXT_KEY)
    member = DataField(MEMBER_KEY)
    line = DataField(LINE_KEY)

    def __init__(
        self,
        message: str | BaseException | None = None,
        cause: BaseException | None = None,
        *,
        data: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        """Initialize a DetailedError instance.

        Args:
            message:
                Human-readable error message. An exception passed here while
                ``cause`` is omitted is taken as the cause and the default
                message is used.
            cause:
                The exception that caused this one, if any.
            data:
                Extra key/value pairs, merged after the named fields.
            **fields:
                Values for the :class:`DataField` accessors declared on the
                class (``code``, ``context``, ``member``, ``line`` and any
                variant field), stored in the order given.

        Raises:
            TypeError: If no message is available or a field name is unknown.
        """
        if isinstance(message, BaseException) and cause is None:
            message, cause = None, message
        if message is None:
            message = self.default_message
        if message is None:
            raise TypeError(f"{type(self).__name__}() missing required argument: 'message'")

        super().__init__(message)
        self.data: dict[str, Any] = {}
        if self.default_code is not None:
            self.code = self.default_code

        for name, value in fields.items():
            if not isinstance(getattr(type(self), name, None), DataField):
                raise TypeError(
                    f"{type(self).__name__}() got an unexpected keyword argument {name!r}"
                )
            setattr(self, name, value)

        if data:
            self.data.update(data)
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        """Return the message given at construction."""
        return str(self.args[0]) if self.args else ""

    @property
    def cause(self) -> BaseException | None:
        """Return the next error in the chain, if any."""
        return self.__cause__

    def with_data(self, mapping: Mapping[str, Any] | None = None, **values: Any) -> Self:
        """Merge extra data into this error and return it.

        Args:
            mapping: Key/value pairs to store first.
            **values: Further key/value pairs, stored after ``mapping``.

        Returns:
            This error, so the call can be chained into a ``raise``.
        """
        if mapping:
            self.data.update(mapping)
        self.data.update(values)
        return self

    def at_call_site(self, *, stacklevel: int = 1) -> Self:
        """Fill ``context``, ``member`` and ``line`` from a calling frame.

        ``context`` is the module name, qualified with the class name when the
        frame belongs to a method (``self`` or ``cls`` is its first local).

        Args:
            stacklevel: 1 for the direct caller, 2 for its caller and so on.

        Returns:
            This error.
        """
        frame = inspect.currentframe()
        try:
            for _ in range(stacklevel):
                if frame is None:
                    break
                frame = frame.f_back
            if frame is None:
                return self

            context = frame.f_globals.get("__name__", "")
            f_code = frame.f_code
            first_arg = f_code.co_varnames[0] if f_code.co_argcount else None
            if first_arg in ("self", "cls") and first_arg in frame.f_locals:
                owner = frame.f_locals[first_arg]
                owner_type = owner if isinstance(owner, type) else type(owner)
                context = f"{context}.{owner_type.__qualname__}"

            self.context = context
            self.member = f_code.co_name
            self.line = str(frame.f_lineno)
        finally:
            del frame
        return self

    def render(self, *, max_depth: int | None = None) -> str:
        """Return the multi-line rendering of this error and its causes.

        Args:
            max_depth: Maximum number of causes rendered; the renderer's
                default when omitted.

        See :class:`xcp.domain.services.chain_renderer.ChainRenderer`.
        """
        # Imported lazily: the renderer module depends on this one.
        from xcp.domain.services.chain_renderer import ChainRenderer

        renderer = ChainRenderer() if max_depth is None else ChainRenderer(max_depth=max_depth)
        return renderer.render(self)

    def __str__(self) -> str:
        """Return the human-readable message for this error."""
        return self.message
