"""Error taxonomy for the short link registry."""


class ShortLinkError(Exception):
    """Base class for registry errors."""


class ValidationError(ShortLinkError):
    """Input URL or custom short code is malformed."""


class NotFoundError(ShortLinkError):
    """Short code is not registered."""

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' not found")
        self.short_code = short_code


class ConflictError(ShortLinkError):
    """Requested custom short code clashes with an existing mapping."""


class CodeGenerationError(ShortLinkError):
    """No free short code was found within the retry budget."""
