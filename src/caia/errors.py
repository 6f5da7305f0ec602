"""Exception types raised by Caia."""


class CaiaError(Exception):
    """Base class for Caia errors."""


class ConfigurationError(CaiaError):
    """A required setting (usually an API key) is missing."""


class TransportError(CaiaError):
    """The conversation service failed while streaming a response."""


class InstructionDecodeError(CaiaError):
    """A candidate instruction could not be decoded as JSON."""

    def __init__(self, candidate: str, reason: str):
        self.candidate = candidate
        self.reason = reason
        super().__init__(reason)


class MutationError(CaiaError):
    """Applying an instruction to a file or spreadsheet failed."""
