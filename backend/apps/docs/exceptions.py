"""Docs page errors."""


class SwaggerPageConfigError(ValueError):
    """Raised at mount time when the page cannot be configured."""
