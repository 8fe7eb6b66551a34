"""Resolve the source location of a caller."""

from __future__ import annotations

import sys

from inbus.domain.models import CallerLocation


def caller_location(depth: int = 1) -> CallerLocation:
    """Return the location *depth* frames above the function calling this one.

    ``depth=1`` is the caller of the function that invokes ``caller_location``.
    Falls back to the outermost frame when the stack is shallower than asked.
    """
    frame = sys._getframe(1)
    for _ in range(depth):
        if frame.f_back is None:
            break
        frame = frame.f_back
    return CallerLocation(
        filename=frame.f_code.co_filename,
        lineno=frame.f_lineno,
        function=frame.f_code.co_name,
    )
