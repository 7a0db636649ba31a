# src/mkvedit/core/errors.py


class MkvEditError(Exception):
    """Base application error for mkvedit.

    Raised for predictable, user-facing failures that the CLI catches and
    prints before exiting with a non-zero status. Nothing is retried.
    """

    pass


class SetupError(MkvEditError):
    """Missing filenames, missing EDITOR, or scratch files that could not be created."""


class ToolError(MkvEditError):
    """An mkvtoolnix binary is missing or exited with an error."""

    def __init__(self, message: str, *, tool: str | None = None, stderr: str | None = None):
        super().__init__(message)
        self.tool = tool
        self.stderr = stderr


class EditorError(MkvEditError):
    """The external editor could not be started or exited unsuccessfully."""


class TagTreeError(MkvEditError):
    """The tag tree from mkvextract does not have the expected shape."""
