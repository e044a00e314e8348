"""Custom exceptions for portfolioview."""


class PortfolioViewError(Exception):
    """Base exception for portfolioview."""
    pass


class ConfigError(PortfolioViewError):
    """Invalid or missing configuration error."""
    pass


class LoadError(PortfolioViewError):
    """A content collection could not be loaded."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class TransportError(LoadError):
    """Fetch failed or returned a non-success status."""

    def __init__(self, message: str, path: str | None = None, status_code: int | None = None):
        super().__init__(message, path)
        self.status_code = status_code


class ParseError(LoadError):
    """Response body is not valid JSON."""
    pass


class SchemaError(LoadError):
    """Top-level JSON value is not a list of records."""
    pass


class MissingTargetError(PortfolioViewError):
    """A page element the pipeline binds to is absent (feature disabled, not fatal)."""

    def __init__(self, selector: str):
        super().__init__(f"No element matches selector: {selector}")
        self.selector = selector
