"""Exception types raised by the link service and store backends."""


class LinkError(Exception):
    """Base class for link errors. ``status_code`` is the HTTP status to report."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidLinkError(LinkError, ValueError):
    """A required field is missing or a value is out of range."""

    status_code = 400


class SlugExistsError(LinkError):
    """The requested slug is already taken."""

    status_code = 409


class LinkNotFoundError(LinkError):
    """No link exists for the given slug."""

    status_code = 404


class UnauthorizedError(LinkError):
    """Missing or wrong admin credential."""

    status_code = 401


class StorageError(LinkError):
    """The backing store failed (connection lost, file unreadable, ...)."""

    status_code = 500


class SlugGenerationError(LinkError):
    """No free random slug was found within the allowed attempts."""

    status_code = 500
