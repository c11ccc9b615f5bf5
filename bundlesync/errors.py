"""Exceptions raised while synchronizing bundle imports.

Every fatal condition of an invocation derives from ``SyncError`` so the
host (the CLI, or a build wrapper) can fail the build phase with one
``except`` clause. A missing manifest is not an error and never raises.
"""


class SyncError(Exception):
    """Base class for fatal synchronization failures."""


class ManifestError(SyncError):
    """The manifest exists but cannot be read, parsed, or lacks the header."""


class DescriptorError(SyncError):
    """The build descriptor cannot be parsed or has an unexpected shape."""


class PersistenceError(SyncError):
    """Writing the descriptor back to disk failed."""


class ConfigError(SyncError):
    """Configuration loading or validation error."""
