"""Exceptions raised while documenting a click application.

Every error derives from ManualError so the click commands can report
them uniformly and exit non-zero without writing partial output.
"""


class ManualError(Exception):
    """Base class for all climanual errors."""

    pass


class FragmentError(ManualError):
    """Raised when a fragment exists but cannot be read."""

    pass


class FragmentNotFoundError(FragmentError):
    """Raised when no directory and no embedded fallback holds a fragment."""

    def __init__(self, name: str):
        super().__init__(f"Fragment not found: {name}")
        self.name = name


class RenderError(ManualError):
    """Raised when the manual template cannot be parsed or executed."""

    pass


class PathResolutionError(ManualError):
    """Raised when the running program's path cannot be resolved."""

    pass


class ConfigError(ManualError):
    """Raised when configuration operations fail."""

    pass


__all__ = [
    "ConfigError",
    "FragmentError",
    "FragmentNotFoundError",
    "ManualError",
    "PathResolutionError",
    "RenderError",
]
