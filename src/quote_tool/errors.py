"""Exception types shared across the quote tool."""


class QuoteToolError(Exception):
    """Base class for all quote tool errors."""


class CatalogError(QuoteToolError):
    """Catalog source data is missing or malformed."""


class PersistenceError(QuoteToolError):
    """A database write failed and was rolled back."""


class NotificationError(QuoteToolError):
    """The email worker could not be reached or rejected the request."""


class EmptyEstimateError(QuoteToolError):
    """Selections priced to zero; nothing worth saving."""
