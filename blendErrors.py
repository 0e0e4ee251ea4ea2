from enum import Enum


class Failure(Enum):
    INVALID_PLACEMENT = "InvalidPlacement"
    DEGENERATE_MASK = "DegenerateMask"
    FACTORIZATION_FAILURE = "FactorizationFailure"
    SOURCE_TOO_SMALL = "SourceTooSmall"


class BlendError(ValueError):
    kind = None

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidPlacement(BlendError):
    kind = Failure.INVALID_PLACEMENT


class DegenerateMask(BlendError):
    kind = Failure.DEGENERATE_MASK


class FactorizationFailure(BlendError):
    kind = Failure.FACTORIZATION_FAILURE


class SourceTooSmall(BlendError):
    kind = Failure.SOURCE_TOO_SMALL
