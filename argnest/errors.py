"""Exceptions raised by argnest."""


class ArgnestError(Exception):
    """Base class for every error raised by argnest."""


class ConfigurationError(ArgnestError):
    """Raised when a command tree is declared incorrectly."""


class ParseError(ArgnestError):
    """Raised when argparse rejects the argument vector.

    Carries the usage and help text of the parser that rejected the input,
    which is the deepest sub-parser that was reached.
    """

    def __init__(
        self,
        message: str,
        *,
        prog: str = '',
        usage: str = '',
        help_text: str = '',
    ) -> None:
        super().__init__(message)
        self.message = message
        self.prog = prog
        self.usage = usage
        self.help_text = help_text

    def render(self, *, with_help: bool = True) -> str:
        """Build the message shown to the user."""
        header = f'{self.prog}: error: {self.message}\n' if self.prog else f'error: {self.message}\n'
        if with_help and self.help_text:
            return f'{header}\n{self.help_text}'
        return f'{self.usage}{header}'


class RunnerError(ArgnestError):
    """Raised when a command runner or fallback fails."""

    def __init__(self, message: str, *, path: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
