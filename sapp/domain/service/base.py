"""Base class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold the business rules that span several repositories, such
    as ownership checks that walk from a content item to its learning path.
    They never commit; the caller's request scope owns the transaction.
    """
