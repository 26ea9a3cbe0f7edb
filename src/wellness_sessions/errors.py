"""Error taxonomy shared by the services and the HTTP layer."""


class WellnessError(Exception):
    """Base class for errors that map to a client-visible response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(WellnessError):
    """A required field is missing or blank."""

    status_code = 400


class ConflictError(WellnessError):
    """The record already exists."""

    status_code = 400


class AuthError(WellnessError):
    """Login failed. Unknown email and wrong password look the same."""

    status_code = 400


class MissingCredentialError(WellnessError):
    """No bearer token was supplied."""

    status_code = 401


class InvalidCredentialError(WellnessError):
    """The bearer token is malformed, expired or badly signed."""

    status_code = 403


class NotFoundError(WellnessError):
    """The record does not exist or is not owned by the caller."""

    status_code = 404


class ServerError(WellnessError):
    """Unexpected failure. The message never carries internal detail."""

    status_code = 500

    def __init__(self, message: str = "Server error") -> None:
        super().__init__(message)
