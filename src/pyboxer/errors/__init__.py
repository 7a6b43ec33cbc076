"""Exceptions raised by pyboxer."""

from pyboxer.errors.meta import (
    BoxAPIError,
    BoxDecodeError,
    BoxerError,
    BoxTransportError,
    RequestAlreadySentError,
    StatusMismatchError,
)

__all__ = [
    "BoxAPIError",
    "BoxDecodeError",
    "BoxerError",
    "BoxTransportError",
    "RequestAlreadySentError",
    "StatusMismatchError",
]
