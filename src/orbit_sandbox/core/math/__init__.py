"""Math utilities namespace."""

from .vector import (  # noqa: F401
    cross,
    finite_rows,
    norm,
    prograde_direction,
    unit,
)
