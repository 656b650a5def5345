# provenance/utils/exceptions.py
from werkzeug.exceptions import HTTPException


class APIError(Exception):
    def __init__(self, message, status_code=400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.message}


class ValidationError(APIError):
    """Malformed or incomplete input."""

    def __init__(self, message):
        super().__init__(message, status_code=400)


class NotFoundError(APIError):
    """A record, CID or nonce that does not exist."""

    def __init__(self, message):
        super().__init__(message, status_code=404)


class AuthError(APIError):
    """Bad credentials, a wrong nonce or a signature that does not match."""

    def __init__(self, message):
        super().__init__(message, status_code=401)


class UpstreamError(APIError):
    """The content store could not be reached or answered with an error.

    Raised instead of reporting "not found" so callers can tell a missing CID
    apart from a failed lookup.
    """

    def __init__(self, message, cause=None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message, status_code=500)


def handle_api_error(error):
    if isinstance(error, HTTPException):
        return {"error": error.description}, error.code
    response = {"error": str(error)} if not hasattr(error, 'to_dict') else error.to_dict()
    status_code = getattr(error, 'status_code', 500)
    return response, status_code
