class ShopwareGeneratorError(Exception):
    """Base exception for the demo data generator."""

    pass


class ConfigurationError(ShopwareGeneratorError):
    """A required credential or setting is missing."""

    pass


class ShopwareAPIError(ShopwareGeneratorError):
    """Base exception for Shopware Admin API errors."""

    def __init__(self, message: str, status_code: int | None = None, response_data: dict | str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class AuthenticationError(ShopwareAPIError):
    pass


class HydrationError(ShopwareAPIError):
    """Reference data needed to write products could not be resolved."""

    pass


class PipelineError(ShopwareGeneratorError):
    pass
