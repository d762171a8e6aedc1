"""Standard aspect constraints and user preset conversion.

User presets are stored the way the crop dialog writes them:
``{"name": str, "ratio": [width, height]}``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from .constraint import AspectConstraint
from .geometry import CropBounds

# (numerator, denominator, description). The label shows denominator x numerator,
# i.e. width x height.
DEFAULT_PRESETS: list[tuple[int, int, str | None]] = [
    (1, 1, "Square"),
    (2, 3, "35mm Film"),
    (3, 4, "Four Thirds"),
    (4, 5, "Large Format"),
    (5, 7, None),
    (9, 16, "HD Video"),
    (10, 16, "Widescreen Display"),
    (17, 22, "US Letter"),
    (1000, 1414, "ISO A Paper"),
]


def default_constraints() -> list[AspectConstraint]:
    """The no-constraint sentinel followed by the standard ratios."""
    out = [AspectConstraint()]
    out.extend(AspectConstraint(n, d, desc) for n, d, desc in DEFAULT_PRESETS)
    return out


def constraint_from_preset(data: Any) -> AspectConstraint:
    if not isinstance(data, dict):
        raise ValueError("preset must be a mapping")
    ratio = data.get("ratio")
    if not isinstance(ratio, (list, tuple)) or len(ratio) != 2:
        raise ValueError(f"preset ratio must be [width, height]: {ratio!r}")
    width, height = ratio
    name = data.get("name")
    description = str(name) if name else None
    return AspectConstraint.validated(height, width, description)


def constraint_to_preset(constraint: AspectConstraint, name: str) -> dict[str, Any]:
    if constraint.is_no_constraint():
        raise ValueError("the no-constraint sentinel has no preset form")
    return {"name": name, "ratio": [constraint.denominator, constraint.numerator]}


def closest_constraint(bounds: CropBounds, candidates: Iterable[AspectConstraint]) -> AspectConstraint:
    """Pick the candidate whose ratio best matches ``bounds``.

    Distance is measured on a log scale so 2:1 and 1:2 are equally far from
    a square. Sentinels and zero-term ratios among the candidates are ignored; when nothing fits
    (or the bounds are degenerate) the sentinel is returned.
    """
    if bounds.width <= 0 or bounds.height <= 0:
        return AspectConstraint()
    target = math.log(bounds.aspect_ratio)
    best: AspectConstraint | None = None
    best_dist = math.inf
    for c in candidates:
        if c.is_no_constraint():
            continue
        ratio = c.aspect_ratio
        if not 0 < ratio < math.inf:
            continue
        dist = abs(math.log(ratio) - target)
        if dist < best_dist:
            best = c
            best_dist = dist
    return best if best is not None else AspectConstraint()
