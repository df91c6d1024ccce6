"""
Stack trace utilities for filtering out logging library frames

Stack text uses one frame per line. Frames are recognised by their
leading "at " marker (JavaScript-style traces and the traces captured
by this module) or by a Python traceback 'File "..."' line.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from itertools import islice
from typing import List, Optional, Pattern, Sequence, Tuple
import re
import sys
import traceback

FRAME_MARKER = "at "
PYTHON_FRAME_MARKER = 'File "'
CAPTURE_HEADER = "Traceback (most recent call first):"

_FUNCTION_LOCATION = re.compile(r"^(.+?)\s+\((.+):(\d+):(\d+)\)$")
_LOCATION = re.compile(r"^(.+):(\d+):(\d+)$")
_AT_SIGN_LOCATION = re.compile(r"^(.+?)@(.+):(\d+):(\d+)$")
_FUNCTION_ONLY = re.compile(r"^(.+?)\s*\(.*\)$")
_PYTHON_FRAME = re.compile(r'^File "(.+)", line (\d+), in (.+)$')
_TEST_FILE = re.compile(
    r"(?:^|[/\\])(?:test_(?P<py>[^/\\]+)\.py"
    r"|(?P<pysuffix>[^/\\]+)_test\.py"
    r"|(?P<js>[^/\\]+)\.(?:test|spec)\.[jt]s)$"
)

# Frames belonging to the logging library or the test runner
LIBRARY_FRAME_PATTERNS: Tuple[Pattern, ...] = tuple(
    re.compile(pattern)
    for pattern in (
        # Package sources, installed or checked out
        r"[/\\]loggical[/\\](?:core|config|formatters|transports|utils|monitoring)[/\\]",
        r"[/\\]loggical[/\\](?:__init__|environment)\.py",
        r"site-packages[/\\]loggical[/\\]",
        # Logger methods
        r"Logger\.(?:debug|info|warn|error|highlight|fatal|log|_log|_dispatch)\b",
        r"\.(?:debug|info|warn|error|highlight|fatal)\b",
        # Internal helpers
        r"capture_filtered_stack_trace",
        r"filter_stack_trace",
        r"format_complete_log",
        r"write_to_transports",
        # Test runner internals
        r"[/\\]_pytest[/\\]",
        r"[/\\]pluggy[/\\]",
        r"site-packages[/\\]pytest[/\\]",
    )
)

# Used when the full pattern set leaves nothing behind
MINIMAL_LIBRARY_FRAME_PATTERNS: Tuple[Pattern, ...] = tuple(
    re.compile(pattern)
    for pattern in (
        r"Logger\.(?:debug|info|warn|error|highlight|fatal|log|_log|_dispatch)\b",
        r"capture_filtered_stack_trace",
        r"format_complete_log",
    )
)


@dataclass(frozen=True)
class StackFrame:
    """One parsed stack frame. Only raw is guaranteed."""

    raw: str
    file: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    function: Optional[str] = None


@dataclass(frozen=True)
class FilteredStackTrace:
    """Stack trace with logging library frames removed."""

    frames: Tuple[StackFrame, ...] = field(default_factory=tuple)
    original_stack: Optional[str] = None
    filtered_stack: Optional[str] = None


@dataclass(frozen=True)
class CallerInfo:
    """Location of the code that called the logger."""

    file: Optional[str] = None
    line: Optional[int] = None
    function: Optional[str] = None


def _test_label(path: str) -> Optional[str]:
    match = _TEST_FILE.search(path)
    if not match:
        return None
    name = match.group("py") or match.group("pysuffix") or match.group("js")
    return f"<{name} test>"


def _parse_frame(line: str) -> StackFrame:
    if line.startswith(PYTHON_FRAME_MARKER):
        match = _PYTHON_FRAME.match(line)
        if match:
            return StackFrame(
                raw=line,
                file=match.group(1),
                line=int(match.group(2)),
                function=match.group(3).strip(),
            )
        return StackFrame(raw=line)

    content = line[len(FRAME_MARKER):]

    match = _FUNCTION_LOCATION.match(content)
    if match:
        return StackFrame(
            raw=line,
            function=match.group(1).strip(),
            file=match.group(2),
            line=int(match.group(3)),
            column=int(match.group(4)),
        )

    match = _LOCATION.match(content)
    if match:
        path = match.group(1)
        return StackFrame(
            raw=line,
            file=path,
            line=int(match.group(2)),
            column=int(match.group(3)),
            function=_test_label(path),
        )

    match = _AT_SIGN_LOCATION.match(content)
    if match:
        return StackFrame(
            raw=line,
            function=match.group(1),
            file=match.group(2),
            line=int(match.group(3)),
            column=int(match.group(4)),
        )

    match = _FUNCTION_ONLY.match(content)
    if match:
        return StackFrame(raw=line, function=match.group(1).strip())

    return StackFrame(raw=line)


def parse_stack_trace(stack: str) -> List[StackFrame]:
    """
    Parse stack text into frames.

    Lines that are not frames (headers, source excerpts, blank lines)
    are skipped.
    """
    frames = []
    for line in stack.splitlines():
        trimmed = line.strip()
        if trimmed.startswith(FRAME_MARKER) or trimmed.startswith(PYTHON_FRAME_MARKER):
            frames.append(_parse_frame(trimmed))
    return frames


def is_library_frame(
    frame: StackFrame,
    patterns: Sequence[Pattern] = LIBRARY_FRAME_PATTERNS,
) -> bool:
    """Check if a frame belongs to the logging library."""
    return any(pattern.search(frame.raw) for pattern in patterns)


def _header(stack: str) -> Optional[str]:
    first_line = stack.split("\n", 1)[0]
    stripped = first_line.strip()
    if not stripped:
        return None
    if stripped.startswith(FRAME_MARKER) or stripped.startswith(PYTHON_FRAME_MARKER):
        return None
    return first_line


def _build(stack: str, frames: List[StackFrame]) -> FilteredStackTrace:
    lines = []
    header = _header(stack)
    if header is not None:
        lines.append(header)
    lines.extend(f"    {frame.raw}" for frame in frames)
    return FilteredStackTrace(
        frames=tuple(frames),
        original_stack=stack,
        filtered_stack="\n".join(lines),
    )


def filter_stack_trace(
    original_stack: Optional[str],
    patterns: Sequence[Pattern] = LIBRARY_FRAME_PATTERNS,
) -> FilteredStackTrace:
    """
    Filter stack text to remove logging library frames.

    Args:
        original_stack: Raw stack text
        patterns: Library frame patterns

    Returns:
        FilteredStackTrace with surviving frames in their original order
    """
    if not original_stack:
        return FilteredStackTrace()

    frames = parse_stack_trace(original_stack)
    user_frames = [frame for frame in frames if not is_library_frame(frame, patterns)]
    return _build(original_stack, user_frames)


def _column(frame) -> int:
    """1-based column of the instruction being executed, 0 if unknown."""
    positions = getattr(frame.f_code, "co_positions", None)
    if positions is None or frame.f_lasti < 0:
        return 0
    position = next(islice(positions(), frame.f_lasti // 2, None), None)
    if not position or position[2] is None:
        return 0
    return position[2] + 1


def render_stack(start_frame) -> str:
    """
    Render the live stack as text, innermost frame first.

    Each frame becomes "at qualname (file:line:column)" so the text can
    be fed to filter_stack_trace.
    """
    lines = [CAPTURE_HEADER]
    for frame, lineno in traceback.walk_stack(start_frame):
        code = frame.f_code
        name = getattr(code, "co_qualname", code.co_name)
        lines.append(f"    at {name} ({code.co_filename}:{lineno}:{_column(frame)})")
    return "\n".join(lines)


def capture_filtered_stack_trace() -> FilteredStackTrace:
    """
    Capture the current stack and filter it.

    The frame of this function is never part of the capture. When the
    full pattern set removes every frame, a reduced set that only strips
    the most obvious library frames is applied instead.
    """
    stack = render_stack(sys._getframe(1))
    result = filter_stack_trace(stack)

    if not result.frames:
        lenient = filter_stack_trace(stack, MINIMAL_LIBRARY_FRAME_PATTERNS)
        if lenient.frames:
            return lenient

    return result


def get_filtered_stack_string() -> Optional[str]:
    """Get just the filtered stack text, or None if nothing was captured."""
    return capture_filtered_stack_trace().filtered_stack


def get_caller_info() -> Optional[CallerInfo]:
    """
    Extract the caller information (first non-library frame).

    Returns:
        CallerInfo or None when no frame could be attributed
    """
    result = capture_filtered_stack_trace()
    if result.frames:
        first = result.frames[0]
        return CallerInfo(file=first.file, line=first.line, function=first.function)

    for frame in parse_stack_trace(render_stack(sys._getframe())):
        text = frame.raw.lower()
        if (
            "get_caller_info" not in text
            and "capture_filtered_stack_trace" not in text
            and "logger." not in text
            and frame.function is not None
        ):
            return CallerInfo(file=frame.file, line=frame.line, function=frame.function)

    return None
