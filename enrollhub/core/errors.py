"""
Error taxonomy shared by services and routers.

Every error carries the HTTP status it maps to; the handlers installed in
``enrollhub.main`` turn them into the ``{success: false, error}`` envelope.
"""


class EnrollHubError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EnrollHubError):
    """Caller-fixable payload problem."""
    status_code = 400


class NotFoundError(EnrollHubError):
    status_code = 404


class ConflictError(EnrollHubError):
    """A unique field (student email) is already taken."""
    status_code = 400


class UpstreamError(EnrollHubError):
    """The group-messaging provider failed or is not configured."""
    status_code = 500


class AuthError(EnrollHubError):
    status_code = 401
