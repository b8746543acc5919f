"""Exception hierarchy for adrus.

Every error the CLI reports to the user derives from :class:`AdrusError`;
anything else is a bug and propagates with a traceback.
"""


class AdrusError(Exception):
    """Base class for user-facing adrus errors."""


class ConfigError(AdrusError):
    """Configuration could not be resolved (missing HOME, editor, bad TOML)."""


class NotebookError(AdrusError):
    """The notebook root is missing or is not a directory."""


class UsageError(AdrusError):
    """The command line could not be parsed."""


class NoteNotFoundError(AdrusError):
    """A command referenced a note the index does not know about."""

    def __init__(self, path: str) -> None:
        super().__init__(f"no note '/{path}'")
        self.path = path


class NotANoteError(AdrusError):
    """A file no longer starts with a valid ``adrus`` header."""

    def __init__(self, path: str) -> None:
        super().__init__(f"path '/{path}' is not an adrus note")
        self.path = path


class MutateError(AdrusError):
    """Reading or rewriting a note failed."""
