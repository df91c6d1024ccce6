"""
Runtime environment detection

Answers the handful of capability questions the logger needs:
which runtime it is in, whether it is a development or CI build,
whether the terminal supports color and whether a file system exists.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import os
import sys

# Platforms where Python runs inside a browser page (Pyodide and friends)
BROWSER_PLATFORMS = ("emscripten", "wasi")

CI_VARIABLES = (
    "CI",
    "CONTINUOUS_INTEGRATION",
    "BUILD_NUMBER",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "CIRCLECI",
    "TRAVIS",
    "JENKINS_URL",
)

DEVELOPMENT_VARIABLES = ("PYTHON_ENV", "APP_ENV", "ENV")


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Snapshot of runtime capabilities."""

    is_server: bool
    is_browser: bool
    is_ci: bool
    is_development: bool
    supports_color: bool
    supports_tty: bool
    has_filesystem: bool
    paas_provider: Optional[str] = None


def _environ(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if env is None else env


def is_browser_environment() -> bool:
    """Detect a page runtime (Python compiled to WebAssembly)."""
    return sys.platform in BROWSER_PLATFORMS


def is_server_environment() -> bool:
    """Detect a regular interpreter with process environment access."""
    return not is_browser_environment()


def has_filesystem() -> bool:
    """Return True when a writable file system is expected to exist."""
    return is_server_environment()


def is_ci_environment(env: Optional[Mapping[str, str]] = None) -> bool:
    """Detect a continuous integration run."""
    environ = _environ(env)
    return any(environ.get(name) for name in CI_VARIABLES)


def is_development_mode(env: Optional[Mapping[str, str]] = None) -> bool:
    """
    Detect development mode.

    Any of PYTHON_ENV, APP_ENV or ENV set to "development" (or "dev")
    counts as a development signal.
    """
    environ = _environ(env)
    for name in DEVELOPMENT_VARIABLES:
        value = environ.get(name, "").strip().lower()
        if value in ("development", "dev"):
            return True
    return False


def supports_tty(stream=None) -> bool:
    """Check whether the output stream is attached to a terminal."""
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed stream
        return False


def supports_color(env: Optional[Mapping[str, str]] = None, stream=None) -> bool:
    """
    Detect ANSI color support.

    NO_COLOR disables colors, FORCE_COLOR enables them, otherwise colors
    are used only when writing to a terminal whose TERM is not "dumb".
    """
    environ = _environ(env)
    if environ.get("NO_COLOR"):
        return False
    force = environ.get("FORCE_COLOR")
    if force is not None:
        return force.strip() not in ("0", "false")
    if is_browser_environment():
        return False
    if not supports_tty(stream):
        return False
    return environ.get("TERM", "").lower() != "dumb"


def detect_paas(env: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Detect the hosting platform from well-known environment variables."""
    environ = _environ(env)
    if environ.get("DYNO"):
        return "heroku"
    if environ.get("VERCEL") or environ.get("NOW_REGION"):
        return "vercel"
    if environ.get("NETLIFY"):
        return "netlify"
    if environ.get("RAILWAY_ENVIRONMENT"):
        return "railway"
    if environ.get("RENDER"):
        return "render"
    if environ.get("APP_PLATFORM"):
        return "digitalocean"
    if environ.get("AWS_LAMBDA_FUNCTION_NAME"):
        return "aws-lambda"
    if environ.get("FUNCTION_NAME") or environ.get("GCP_PROJECT"):
        return "gcp"
    if environ.get("AZURE_FUNCTIONS_ENVIRONMENT"):
        return "azure"
    return None


def detect_environment(env: Optional[Mapping[str, str]] = None) -> RuntimeEnvironment:
    """
    Collect all runtime capabilities into one snapshot.

    Args:
        env: Environment mapping (default: os.environ)

    Returns:
        RuntimeEnvironment instance
    """
    return RuntimeEnvironment(
        is_server=is_server_environment(),
        is_browser=is_browser_environment(),
        is_ci=is_ci_environment(env),
        is_development=is_development_mode(env),
        supports_color=supports_color(env),
        supports_tty=supports_tty(),
        has_filesystem=has_filesystem(),
        paas_provider=detect_paas(env),
    )
