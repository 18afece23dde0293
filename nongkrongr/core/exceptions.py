"""Domain errors raised by the service layer."""


class NongkrongrError(Exception):
    """Base class for errors the API turns into JSON responses."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(NongkrongrError):
    status_code = 404


class ConflictError(NongkrongrError):
    status_code = 409


class InvalidStateError(NongkrongrError):
    """A status transition or field combination that is not allowed."""

    status_code = 422


class AIServiceError(NongkrongrError):
    """The generative AI backend failed or returned something unusable."""

    status_code = 502
