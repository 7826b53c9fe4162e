"""Exceptions raised by the Slingo engine."""


class SlingoError(ValueError):
    """Base class for caller errors the engine refuses to work around."""


class InvalidDrawConfigurationError(SlingoError):
    """Wrong number of draw rows, wrong row length, or an unknown label."""

    def __init__(self, message: str):
        super().__init__(f"Invalid draw configuration: {message}")
        self.reason = message


class InvalidBoardError(SlingoError):
    """Board labels that do not form a size x size grid."""
