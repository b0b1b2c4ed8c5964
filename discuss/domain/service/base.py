"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold thread logic that doesn't belong to a single
    comment node, such as tree mutation and view projection.
    """

    pass
