# treecopy/errors.py


class TreeCopyError(Exception):
    """Base class for failures that abort a whole operation."""


class EnumerationFailure(TreeCopyError):
    """The workspace root is unavailable or listing its files failed."""


class MisconfiguredRoot(EnumerationFailure):
    """No workspace root is known."""


class PreconditionFailure(TreeCopyError):
    """The request was rejected before any I/O (e.g. nothing selected)."""
