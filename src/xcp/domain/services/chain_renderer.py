# src/xcp/domain/services/chain_renderer.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Cause-chain rendering service.

Purpose:
    Produce a deterministic, human-readable, multi-line rendering of an error
    and its explicit cause chain:

        * One header line per error: ``<qualified type>: <message>``.
        * For :class:`DetailedError` nodes, one ``[Key: "value", ...]`` line
          listing the non-empty entries of ``data`` in insertion order.
        * A ``---> `` marker in front of each cause.
        * A trailing stack-trace block, one ``--<TypeName>`` section per error
          in the chain that has actually been raised.

    The rendering is recomputed on every call; nothing is cached.

    This service does not perform any logging. The logging integration in
    ``xcp.infrastructure.logging`` wires the result into log records.

Layer:
    domain/services
"""

from __future__ import annotations

import traceback
from collections.abc import Iterator, Mapping
from typing import Any

from xcp.domain.exceptions.base import DetailedError

__all__ = [
    "DEFAULT_MAX_CHAIN_DEPTH",
    "CAUSE_MARKER",
    "TRACE_SEPARATOR",
    "ChainRenderer",
    "iter_cause_chain",
    "qualified_type_name",
    "render_chain",
]

DEFAULT_MAX_CHAIN_DEPTH = 64
CAUSE_MARKER = "---> "
TRACE_SEPARATOR = "--"

_NEWLINE = "\n"
_UNQUALIFIED_MODULES = frozenset({"builtins", "__main__"})


def iter_cause_chain(
    error: BaseException,
    *,
    max_depth: int = DEFAULT_MAX_CHAIN_DEPTH,
) -> Iterator[BaseException]:
    """Yield ``error`` followed by each explicit cause, outermost first.

    Traversal follows ``__cause__`` only. It stops at the first error already
    yielded (a cyclic chain) and after ``max_depth`` causes.

    Args:
        error: The outermost error.
        max_depth: Maximum number of causes to follow below ``error``.

    Yields:
        Errors of the chain in outer-to-inner order.
    """
    seen: set[int] = set()
    current: BaseException | None = error
    depth = 0
    while current is not None and depth <= max_depth and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__
        depth += 1


def qualified_type_name(error: BaseException) -> str:
    """Return ``module.QualName`` for the error's type.

    Built-in and ``__main__`` types are shown without their module, the way
    :mod:`traceback` prints them.
    """
    cls = type(error)
    module = cls.__module__
    if not module or module in _UNQUALIFIED_MODULES:
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"


class ChainRenderer:
    """Render an error together with its cause chain."""

    def __init__(self, *, max_depth: int = DEFAULT_MAX_CHAIN_DEPTH) -> None:
        """Initialize the renderer.

        Args:
            max_depth:
                Maximum number of causes rendered below the outermost error.
                Deeper causes are left out.
        """
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        """Return the maximum number of causes rendered."""
        return self._max_depth

    def render(self, error: BaseException) -> str:
        """Render ``error`` and its causes.

        Behavior:
            * Entries whose value is ``None`` or renders as ``""`` are left out
              of the additional-info line; whitespace-only values are kept.
            * No additional-info line is written when nothing survives.
            * The stack-trace block is written once, after the last cause, and
              only when at least one error of the chain carries a traceback.
              The final line break of the output is then removed.

        Args:
            error: The outermost error. Any exception type is accepted; only
                :class:`DetailedError` nodes contribute additional info.

        Returns:
            The rendering.
        """
        chain = list(iter_cause_chain(error, max_depth=self._max_depth))
        parts: list[str] = []

        for depth, node in enumerate(chain):
            if depth:
                parts.append(CAUSE_MARKER)
            parts.append(f"{qualified_type_name(node)}: {node}{_NEWLINE}")
            info = self._additional_info(node)
            if info:
                parts.append(f"[{info}]{_NEWLINE}")

        if self._append_stack_traces(chain, parts):
            parts[-1] = parts[-1].removesuffix(_NEWLINE)
        return "".join(parts)

    @staticmethod
    def _additional_info(error: BaseException) -> str:
        """Return the comma-joined ``key: "value"`` entries for ``error``."""
        data: Mapping[str, Any] = error.data if isinstance(error, DetailedError) else {}
        properties: list[str] = []
        for key, value in data.items():
            if value is None:
                continue
            text = str(value)
            if not text:
                continue
            properties.append(f'{key}: "{text}"')
        return ", ".join(properties)

    @staticmethod
    def _append_stack_traces(chain: list[BaseException], parts: list[str]) -> bool:
        """Append one trace section per raised error; return whether any was added."""
        has_stack_traces = False
        for node in chain:
            tb = node.__traceback__
            if tb is None:
                continue
            has_stack_traces = True
            parts.append(f"{TRACE_SEPARATOR}{type(node).__name__}{_NEWLINE}")
            for line in "".join(traceback.format_tb(tb)).split(_NEWLINE):
                trimmed = line.rstrip()
                if trimmed:
                    parts.append(f"{trimmed}{_NEWLINE}")
        return has_stack_traces


def render_chain(error: BaseException, *, max_depth: int = DEFAULT_MAX_CHAIN_DEPTH) -> str:
    """Render ``error`` and its causes with a one-off :class:`ChainRenderer`."""
    return ChainRenderer(max_depth=max_depth).render(error)
