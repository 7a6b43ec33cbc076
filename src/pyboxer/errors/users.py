"""User specific errors."""

from pyboxer.errors.meta import StatusMismatchError


class UserLoginAlreadyUsedError(StatusMismatchError):
    """Exception is thrown when the login is already used by another user."""

    message = "The login is already used by another user!"


class UserNotFoundError(StatusMismatchError):
    """Exception is thrown when the user does not exist or is not visible with the current token."""

    message = "The user could not be found."


class UserHasContentError(StatusMismatchError):
    """Exception is thrown when a user that still owns content is deleted without force."""

    message = "The user still owns content, use force=True to delete the user anyway."


class InsufficientPermissionsError(StatusMismatchError):
    """Exception is thrown when the token is not allowed to perform the operation."""

    message = "Insufficient permissions for this operation."


class BadRequestError(StatusMismatchError):
    """Exception is thrown when the API rejected the request parameters or body."""

    message = "The request was rejected as invalid."


class ConflictError(StatusMismatchError):
    """Exception is thrown when the request conflicts with the state of the resource."""

    message = "The request conflicts with the current state of the resource."
