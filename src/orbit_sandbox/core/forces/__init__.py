"""Forces and model utilities."""

from .base import Model  # noqa: F401
from .central_gravity import CentralGravity  # noqa: F401
from .composite import CompositeModel, model_from_config  # noqa: F401
from .nbody_gravity import NBodyGravity  # noqa: F401
