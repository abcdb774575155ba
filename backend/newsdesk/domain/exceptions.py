class DomainError(Exception):
    """Base class for errors raised by the publication engine.

    ``status_code`` is the HTTP status the error handler answers with; the
    message is passed through to the client verbatim.
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvariantViolation(DomainError):
    status_code = 400


class TransitionRejected(DomainError):
    status_code = 400


class PermissionDenied(DomainError):
    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    status_code = 409


class PreviewLinkExpired(DomainError):
    status_code = 401
