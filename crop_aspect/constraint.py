"""Aspect ratio constraint for interactive crop rectangles.

An ``AspectConstraint`` is either a fixed ``numerator:denominator`` ratio or
the "no constraint" sentinel ``(0, 0)``. Its adjust methods take the
rectangle a drag gesture produced and return one that honours the ratio
(``height / width == numerator / denominator``), keeping the edge opposite
to the dragged one in place.

The label returned by ``str()`` doubles as the persisted form; see
``from_string``. ``to_dict``/``from_dict`` are the structured encoding used
by the settings file.
"""

from __future__ import annotations

import math
import re
from typing import Any

from .geometry import CropBounds
from .i18n import LOCALE
from .logger import get_logger

_logger = get_logger("constraint")

NO_CONSTRAINT_NAME = LOCALE.get("NoConstraintName")

_LABEL_RE = re.compile(r".* \| ([0-9]+) x ([0-9]+).*")


def _divide(a: float, b: float) -> float:
    """Float division where a zero divisor gives a signed infinity, or NaN for 0/0."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _format_ratio(x: float) -> str:
    # Spelled like the labels older files contain.
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    return f"{x:.2f}"


# Handle names follow the crop overlay: corners, edges, and the two
# dimension spin boxes ("w", "h").
_HANDLE_METHODS = {
    "tl": "adjust",
    "tr": "adjust",
    "bl": "adjust",
    "br": "adjust",
    "move": "adjust",
    "center": "adjust",
    "l": "adjust_left",
    "r": "adjust_right",
    "t": "adjust_top",
    "b": "adjust_bottom",
    "w": "adjust_width",
    "h": "adjust_height",
}


class AspectConstraint:
    __slots__ = ("_numerator", "_denominator", "_name")

    def __init__(self, numerator: int = 0, denominator: int = 0, description: str | None = None) -> None:
        self._numerator = numerator
        self._denominator = denominator
        if self.is_no_constraint():
            self._name = NO_CONSTRAINT_NAME
            return
        inv = _divide(1, self.aspect_ratio)
        name = f"{_format_ratio(inv)} | {denominator} x {numerator}"
        if description is not None:
            name += f" ({description})"
        self._name = name

    @classmethod
    def no_constraint(cls) -> AspectConstraint:
        return cls()

    @classmethod
    def validated(cls, numerator: int, denominator: int, description: str | None = None) -> AspectConstraint:
        """Like the constructor, but reject anything but a positive pair or (0, 0)."""
        for v in (numerator, denominator):
            if isinstance(v, bool) or not isinstance(v, int):
                raise ValueError(f"ratio terms must be integers: {numerator!r}, {denominator!r}")
        if numerator == 0 and denominator == 0:
            return cls()
        if numerator <= 0 or denominator <= 0:
            raise ValueError(f"ratio terms must both be positive: {numerator}:{denominator}")
        return cls(numerator, denominator, description)

    # ---- label ----
    @property
    def name(self) -> str:
        return self._name

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        if self.is_no_constraint():
            return "AspectConstraint()"
        return f"AspectConstraint({self._numerator}, {self._denominator})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AspectConstraint):
            return NotImplemented
        return (self._numerator, self._denominator) == (other._numerator, other._denominator)

    def __hash__(self) -> int:
        return hash((self._numerator, self._denominator))

    @classmethod
    def from_string(cls, s: str) -> AspectConstraint | None:
        """Decode a label produced by ``str()``.

        The label spells the ratio as ``denominator x numerator``. Returns
        None when ``s`` is neither the no-constraint label nor a match; the
        description suffix is not recovered.
        """
        if s == NO_CONSTRAINT_NAME:
            return cls()
        m = _LABEL_RE.fullmatch(s)
        if m is None:
            _logger.debug("unparseable aspect label: %r", s)
            return None
        den = int(m.group(1))
        num = int(m.group(2))
        return cls(num, den)

    # ---- structured encoding ----
    def to_dict(self) -> dict[str, int]:
        return {"numerator": self._numerator, "denominator": self._denominator}

    @classmethod
    def from_dict(cls, data: Any) -> AspectConstraint:
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        try:
            num = data["numerator"]
            den = data["denominator"]
        except KeyError as e:
            raise ValueError(f"missing field: {e.args[0]}") from e
        for v in (num, den):
            if isinstance(v, bool) or not isinstance(v, int):
                raise ValueError(f"ratio terms must be integers: {num!r}, {den!r}")
        return cls(num, den)

    @classmethod
    def parse(cls, value: Any) -> AspectConstraint | None:
        """Decode either the structured dict or a legacy label string."""
        if isinstance(value, dict):
            return cls.from_dict(value)
        if isinstance(value, str):
            return cls.from_string(value)
        raise ValueError(f"cannot decode aspect constraint from {type(value).__name__}")

    # ---- queries ----
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def aspect_ratio(self) -> float:
        # NaN for the sentinel; check is_no_constraint() first.
        return _divide(self._numerator, self._denominator)

    def is_no_constraint(self) -> bool:
        return self._numerator == 0 and self._denominator == 0

    # ---- derived constraints ----
    def _swapped(self) -> AspectConstraint:
        if self.is_no_constraint():
            return AspectConstraint()
        return AspectConstraint(self._denominator, self._numerator)

    def inverse(self) -> AspectConstraint:
        """The reciprocal ratio. Any description is dropped."""
        return self._swapped()

    def transpose(self) -> AspectConstraint:
        """The same ratio for the rectangle rotated a quarter turn."""
        return self._swapped()

    # ---- adjustments ----
    def adjust(self, bad: CropBounds) -> CropBounds:
        """Same center and area as ``bad``, reshaped to the ratio."""
        if self.is_no_constraint():
            return bad
        ratio = self.aspect_ratio
        area = bad.width * bad.height
        width = _sqrt(_divide(area, ratio))
        height = _sqrt(area * ratio)
        return CropBounds(bad.center_x, bad.center_y, width, height, bad.angle)

    def _adjust_edge(self, bad: CropBounds, axis: str, sign: int) -> CropBounds:
        """Recompute one dimension from the other.

        ``axis`` names the dimension that changes ("w" or "h"). The center
        moves by ``sign * delta / 2`` along that local axis, which keeps the
        edge on the opposite side fixed; sign 0 keeps the center.
        """
        if self.is_no_constraint():
            return bad
        ratio = self.aspect_ratio
        (ux, uy), (vx, vy) = bad.axes()
        if axis == "w":
            width = _divide(bad.height, ratio)
            height = bad.height
            delta = width - bad.width
            ax, ay = ux, uy
        else:
            width = bad.width
            height = bad.width * ratio
            delta = height - bad.height
            ax, ay = vx, vy
        center = bad.center
        if sign:
            center.setX(center.x() + sign * ax * delta / 2)
            center.setY(center.y() + sign * ay * delta / 2)
        return CropBounds.from_center(center, width, height, bad.angle)

    def adjust_left(self, bad: CropBounds) -> CropBounds:
        return self._adjust_edge(bad, "w", -1)

    def adjust_right(self, bad: CropBounds) -> CropBounds:
        return self._adjust_edge(bad, "w", 1)

    def adjust_top(self, bad: CropBounds) -> CropBounds:
        return self._adjust_edge(bad, "h", -1)

    def adjust_bottom(self, bad: CropBounds) -> CropBounds:
        return self._adjust_edge(bad, "h", 1)

    def adjust_width(self, bad: CropBounds) -> CropBounds:
        return self._adjust_edge(bad, "w", 0)

    def adjust_height(self, bad: CropBounds) -> CropBounds:
        return self._adjust_edge(bad, "h", 0)

    def adjust_for_handle(self, bad: CropBounds, handle: str) -> CropBounds:
        """Apply the adjustment matching the overlay handle being dragged."""
        method = _HANDLE_METHODS.get((handle or "").lower())
        if method is None:
            raise ValueError(f"unknown crop handle: {handle!r}")
        return getattr(self, method)(bad)
