"""pyboxer configuration custom exceptions."""

from __future__ import annotations

from pyboxer.errors.meta import BoxerError


class BoxConfigError(BoxerError):
    """Error base class for all config related Errors."""

    def __init__(self, *args) -> None:
        super().__init__(
            *args,
            "See the configuration section of the pyboxer README for the available options.",
        )


class MissingCredentialsConfigError(BoxConfigError):
    """Error if no credentials config is available."""

    def __init__(self) -> None:
        super().__init__(
            "To create a BoxContext you need to provide a credentials config.\n"
            "Either through the token_provider parameter or through the config file.",
        )


class TokenProviderConfigError(BoxConfigError):
    """Error if the credentials config is invalid."""

    def __init__(self, *args) -> None:
        super().__init__(*args)


class MissingBoxHostError(TokenProviderConfigError):
    """Raised when the domain in the config is empty."""

    def __init__(self) -> None:
        super().__init__("The domain in your credentials configuration is empty.")
