class ConfigurationError(Exception):
    """Raised when an extraction request or monitor config is unusable."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ApiResponseError(ConfigurationError):
    """Raised when a structured API payload has no usable room entries."""
