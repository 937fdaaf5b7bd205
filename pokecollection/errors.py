class CollectionError(Exception):
    """Base for every failure the UI renders as a message."""


class ValidationError(CollectionError, ValueError):
    pass


class NotFound(CollectionError, LookupError):
    pass
