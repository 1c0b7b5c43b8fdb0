"""
Trace filtering.

Turns the traceback captured on a raised exception into a list of
readable lines, innermost frame (the raise site) first. Frames without
a line number, and frames whose rendering contains any of the omitted
source substrings, are dropped.
"""

import traceback
from collections.abc import Iterable
from typing import Optional


def render_frame(frame: traceback.FrameSummary) -> str:
    """Render one frame as a single line."""
    text = f'File "{frame.filename}", line {frame.lineno}, in {frame.name}'
    if frame.line:
        text = f"{text}: {frame.line}"
    return text


def filter_trace(
    exc: Optional[BaseException], omit_sources: Iterable[str] = ()
) -> list[str]:
    """Return the filtered trace lines of `exc`.

    Args:
        exc: The raised exception. May be None.
        omit_sources: Substrings; any frame rendering containing one is dropped.

    Returns:
        Rendered frames, innermost first. Empty when there is no traceback.
    """
    if exc is None or exc.__traceback__ is None:
        return []

    omit = [source for source in omit_sources if source]
    lines: list[str] = []
    for frame in reversed(traceback.extract_tb(exc.__traceback__)):
        if frame.lineno is None:
            continue
        rendered = render_frame(frame)
        if any(source in rendered for source in omit):
            continue
        lines.append(rendered)
    return lines
