from __future__ import annotations

import math
from dataclasses import dataclass, replace

from PySide6.QtCore import QPointF

_ANGLE_EPS = 1e-9


@dataclass(frozen=True, slots=True)
class CropBounds:
    """Rotated crop rectangle described by its center, size and angle.

    Coordinates are image pixels with y growing down. In the rectangle's own
    frame x grows to the right and y grows down; ``angle`` (radians) rotates
    that frame into image coordinates.
    """

    center_x: float
    center_y: float
    width: float
    height: float
    angle: float = 0.0

    @classmethod
    def from_center(cls, center: QPointF, width: float, height: float, angle: float = 0.0) -> CropBounds:
        return cls(float(center.x()), float(center.y()), float(width), float(height), float(angle))

    @property
    def center(self) -> QPointF:
        """A fresh point; moving it does not touch these bounds."""
        return QPointF(self.center_x, self.center_y)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        """Height over width, the orientation AspectConstraint uses."""
        if self.width == 0:
            return math.inf
        return self.height / self.width

    def axes(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Return the rotated unit x and y axes in image coordinates."""
        c = math.cos(self.angle)
        s = math.sin(self.angle)
        return (c, s), (-s, c)

    def _point(self, fx: float, fy: float) -> QPointF:
        # fx, fy in [-1, 1]: offsets along the local axes in half-sizes.
        (ux, uy), (vx, vy) = self.axes()
        hw = self.width / 2
        hh = self.height / 2
        return QPointF(
            self.center_x + fx * hw * ux + fy * hh * vx,
            self.center_y + fx * hw * uy + fy * hh * vy,
        )

    @property
    def upper_left(self) -> QPointF:
        return self._point(-1, -1)

    @property
    def upper_right(self) -> QPointF:
        return self._point(1, -1)

    @property
    def lower_left(self) -> QPointF:
        return self._point(-1, 1)

    @property
    def lower_right(self) -> QPointF:
        return self._point(1, 1)

    @property
    def left_mid(self) -> QPointF:
        return self._point(-1, 0)

    @property
    def right_mid(self) -> QPointF:
        return self._point(1, 0)

    @property
    def top_mid(self) -> QPointF:
        return self._point(0, -1)

    @property
    def bottom_mid(self) -> QPointF:
        return self._point(0, 1)

    def with_size(self, width: float, height: float) -> CropBounds:
        return replace(self, width=float(width), height=float(height))

    def with_center(self, center: QPointF) -> CropBounds:
        return replace(self, center_x=float(center.x()), center_y=float(center.y()))

    def is_angle_sensitive(self) -> bool:
        r = math.remainder(self.angle, 2 * math.pi)
        return abs(r) > _ANGLE_EPS
