"""Runtime environment probes used during client construction.

- read_env: credential lookup against an injectable mapping (defaults to os.environ)
- is_running_in_browser: detects a browser-hosted interpreter (Pyodide/emscripten)
"""

import os
import sys
from typing import Any, Mapping, Optional


def read_env(name: str, env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the value of `name`, or None when it is unset or empty."""
    source = os.environ if env is None else env
    value = source.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _browser_scope() -> Any:
    # Only a WebAssembly build can see the JS globals
    if sys.platform != "emscripten":
        return None
    try:
        import js  # type: ignore[import-not-found]
    except ImportError:
        return None
    return js


def is_running_in_browser(scope: Any = None) -> bool:
    """Check for the window/document/navigator globals of a browser page.

    `scope` is any object exposing globals as attributes; when omitted the
    Pyodide `js` module is used if available.
    """
    if scope is None:
        scope = _browser_scope()
    if scope is None:
        return False
    window = getattr(scope, "window", None)
    if window is None:
        return False
    return getattr(window, "document", None) is not None and getattr(scope, "navigator", None) is not None
