class ScavengerError(Exception):
    """Base error for dungeon scavenger domain exceptions."""


class ConfigurationError(ScavengerError):
    """Raised when settings or inputs cannot produce a valid level.

    Examples: a catalog smaller than the requested unique item count, or too few
    rooms to reserve the start room, the exit room and every item room.
    """


class GeometryViolation(ScavengerError):
    """Raised when room geometry from the generator is malformed (e.g. a door off the perimeter)."""
