"""State namespace."""

from .bodies import BodiesState  # noqa: F401
from .registry import (  # noqa: F401
    CENTRAL_BODY_ID,
    REASON_CRASH,
    REASON_DELETED,
    REASON_DESPAWN,
    Body,
    BodyRegistry,
    RemovalEvent,
)
