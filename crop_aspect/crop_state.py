from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from .constraint import AspectConstraint
from .geometry import CropBounds
from .logger import get_logger

_logger = get_logger("crop_state")


class CropState(QObject):
    """Crop rectangle and active aspect constraint for an editing session.

    Design:
    - Bounds are in image pixels, rotated by their own angle.
    - The overlay proposes bounds for a drag handle; the constraint here is
      authoritative for reshaping them.
    """

    boundsChanged = Signal(object)
    constraintChanged = Signal(object)

    def __init__(self, bounds: CropBounds, constraint: AspectConstraint | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._bounds = bounds
        self._constraint = constraint if constraint is not None else AspectConstraint()

    @property
    def bounds(self) -> CropBounds:
        return self._bounds

    @property
    def constraint(self) -> AspectConstraint:
        return self._constraint

    def set_bounds(self, bounds: CropBounds) -> None:
        if bounds == self._bounds:
            return
        self._bounds = bounds
        self.boundsChanged.emit(bounds)

    def set_constraint(self, constraint: AspectConstraint) -> None:
        if constraint == self._constraint and str(constraint) == str(self._constraint):
            return
        self._constraint = constraint
        _logger.debug("crop constraint: %s", constraint)
        self.constraintChanged.emit(constraint)
        # Snap the current rect to the new ratio.
        self.set_bounds(constraint.adjust(self._bounds))

    def drag(self, proposed: CropBounds, handle: str) -> CropBounds:
        """Reshape ``proposed`` for ``handle`` and make it current."""
        good = self._constraint.adjust_for_handle(proposed, handle)
        self.set_bounds(good)
        return good

    def transpose(self) -> None:
        """Rotate the crop orientation a quarter turn about its center."""
        b = self._bounds
        c = self._constraint.transpose()
        if c != self._constraint or str(c) != str(self._constraint):
            self._constraint = c
            self.constraintChanged.emit(c)
        self.set_bounds(b.with_size(b.height, b.width))

    def invert(self) -> None:
        self.set_constraint(self._constraint.inverse())
