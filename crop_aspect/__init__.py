"""Aspect ratio constraints for interactive crop rectangles.

Keep this module lightweight: it only re-exports the value types.
The Qt-bound session state lives in `crop_aspect.crop_state`.
"""

from .constraint import NO_CONSTRAINT_NAME, AspectConstraint
from .geometry import CropBounds
from .presets import closest_constraint, default_constraints

__all__ = [
    "NO_CONSTRAINT_NAME",
    "AspectConstraint",
    "CropBounds",
    "closest_constraint",
    "default_constraints",
]
