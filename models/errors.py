"""
Placement Error Taxonomy

Controllers raise these; the CLI layer is the only place that catches and
displays them.
"""


class PlacementError(Exception):
    """Base class for every domain failure."""


class NotFoundError(PlacementError):
    """An id lookup found nothing."""


class InvalidStateError(PlacementError):
    """The operation is not allowed in the entity's current status."""


class InvalidArgumentError(PlacementError, ValueError):
    """A field value is malformed, duplicated or out of bounds."""


class UnauthorizedError(PlacementError):
    """The acting user may not perform this operation."""
