"""Errors that end a signup request early.

Each carries the HTTP status and the message for the client. ``exposed``
says whether that message may be shown as-is; otherwise the endpoint's
generic failure message is used and the detail only goes to the log.
"""


class SignupError(Exception):
    status_code = 500
    exposed = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SignupError):
    status_code = 400
    exposed = True


class VerificationError(SignupError):
    status_code = 400
    exposed = True


class ConfigurationError(SignupError):
    status_code = 500
    exposed = True


class UpstreamError(SignupError):
    """A critical outbound call failed."""

    status_code = 500
