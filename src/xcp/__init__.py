"""xcp: structured, chainable exceptions.

Detailed errors carry a machine-readable code, an origin label and ordered
extra data, and render themselves together with their whole cause chain:

    try:
        load(path)
    except OSError as exc:
        raise InvOpError("Config could not be loaded", exc, member="load").at_call_site()
"""

from __future__ import annotations

from xcp.domain.exceptions import (
    ArgError,
    ArgNullError,
    ArgOutOfRangeError,
    DataField,
    DetailedError,
    InvOpError,
    ObjDisposedError,
)
from xcp.domain.services.chain_renderer import ChainRenderer, iter_cause_chain, render_chain

__all__ = [
    "ArgError",
    "ArgNullError",
    "ArgOutOfRangeError",
    "ChainRenderer",
    "DataField",
    "DetailedError",
    "InvOpError",
    "ObjDisposedError",
    "iter_cause_chain",
    "render_chain",
]
