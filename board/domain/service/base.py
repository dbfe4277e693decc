"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the comment rules that span several entities:
    comment, thread counters, likes and the per-user aggregates.
    """

    pass
