from __future__ import annotations

import json
import os
from typing import Any

from .constraint import AspectConstraint
from .logger import get_logger
from .presets import constraint_from_preset

_logger = get_logger("settings")


class SettingsManager:
    def __init__(self, settings_path: str):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "crop_aspect": {"numerator": 0, "denominator": 0},
        "crop_presets": [],
        "crop_aspect_recent": [],
        "crop_aspect_recent_limit": 8,
    }

    def load(self) -> None:
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except Exception as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except Exception as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def has(self, key: str) -> bool:
        return key in self._settings

    def set(self, key: str, value: Any) -> None:
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    # ---- crop aspect ----
    @staticmethod
    def _decode(value: Any) -> AspectConstraint | None:
        try:
            return AspectConstraint.parse(value)
        except (ValueError, ArithmeticError) as e:
            _logger.debug("malformed crop_aspect entry %r: %s", value, e)
            return None

    @property
    def aspect_constraint(self) -> AspectConstraint:
        """The saved constraint; older files store only the label string."""
        raw = self.get("crop_aspect")
        c = self._decode(raw)
        if c is None:
            _logger.warning("unreadable crop_aspect %r; using no constraint", raw)
            return AspectConstraint()
        return c

    def set_aspect_constraint(self, constraint: AspectConstraint) -> None:
        label = str(constraint)
        self._settings["crop_aspect"] = constraint.to_dict()
        self._settings["crop_aspect_label"] = label

        limit = self.get("crop_aspect_recent_limit")
        try:
            limit = max(1, int(limit))
        except (TypeError, ValueError):
            limit = int(self.DEFAULTS["crop_aspect_recent_limit"])
        recent = [r for r in self.get("crop_aspect_recent") or [] if isinstance(r, str) and r != label]
        self._settings["crop_aspect_recent"] = [label, *recent][:limit]
        self.save()

    @property
    def recent_constraints(self) -> list[AspectConstraint]:
        out: list[AspectConstraint] = []
        for label in self.get("crop_aspect_recent") or []:
            c = self._decode(label) if isinstance(label, str) else None
            if c is None:
                _logger.debug("skipping recent crop_aspect %r", label)
                continue
            out.append(c)
        return out

    @property
    def preset_constraints(self) -> list[AspectConstraint]:
        out: list[AspectConstraint] = []
        for preset in self.get("crop_presets") or []:
            try:
                out.append(constraint_from_preset(preset))
            except ValueError as e:
                _logger.warning("skipping crop preset %r: %s", preset, e)
        return out
