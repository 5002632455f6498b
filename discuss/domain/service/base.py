"""Base class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the comment-thread rules that don't belong to a
    single entity: ownership checks, vote toggling, threading and reads.
    """

    pass
