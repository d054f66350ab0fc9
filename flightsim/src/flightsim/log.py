"""
Console logging with caller context. Every line is prefixed with the wall-clock time, the source file and line, and the
qualified name of the function that logged it:

    12:00:01 reconciler.py:88:Reconciler._create: surface rejected marker for 3F2: latitude out of range
"""

from datetime import datetime
import inspect
import os
from typing import Any

from flightsim.util import maybe


_src_root = ""  # pylint: disable=invalid-name
_seen: set[str] = set()


def set_src_root(path: str) -> None:
    """
    Set the directory prefix to strip from filenames in log message context.
    """
    global _src_root
    _src_root = os.path.abspath(path)
    if not _src_root.endswith("/"):
        _src_root += "/"


def log(*args: object, **kwargs: Any) -> None:
    """
    Log a message to the console prefixed with caller context. The arguments to this function are passed directly to
    print() after the context is printed.
    """
    _log(4, *args, **kwargs)


def log_once(key: str, *args: object, **kwargs: Any) -> bool:
    """
    Log a message unless a message with the same key has already been logged. Returns True if the message was printed.
    Used for errors that would otherwise repeat on every tick.
    """
    if key in _seen:
        return False
    _seen.add(key)
    _log(4, *args, "(future messages of this kind will be suppressed)", **kwargs)
    return True


def _log(depth: int, *args: object, **kwargs: Any) -> None:
    # fmt: off
    frame    = maybe(lambda: inspect.stack()[depth].frame            )
    caller   = maybe(lambda: inspect.getframeinfo(frame)             ) if frame  else None
    filename = maybe(lambda: caller.filename.removeprefix(_src_root) ) if caller else None
    lineno   = maybe(lambda: caller.lineno                           ) if caller else None
    qualname = maybe(lambda: frame.f_code.co_qualname                ) if frame  else None
    # fmt: on

    print(datetime.now().strftime("%H:%M:%S"), end=" ")

    has_file_context = bool(filename and lineno is not None)
    has_fn_context = bool(qualname)

    if has_file_context:
        print(f"{filename}:{lineno}:", end="")
    if has_fn_context:
        print(f"{qualname}:", end="")

    if has_file_context or has_fn_context:
        print(" ", end="")

    print(*args, **kwargs)
