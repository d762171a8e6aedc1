"""Localized UI strings looked up by key.

Keep this module free of Qt dependencies.
"""

from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger

_logger = get_logger("i18n")

DEFAULT_STRINGS: dict[str, str] = {
    "NoConstraintName": "No Constraint",
}


class Locale:
    def __init__(self, bundle: dict[str, str] | None = None) -> None:
        self._bundle: dict[str, str] = dict(bundle or {})

    @classmethod
    def from_json(cls, path: str) -> Locale:
        """Load a bundle from a JSON object of strings.

        Unreadable files and non-object payloads are logged and yield the
        built-in defaults. Non-string values are dropped.
        """
        bundle: dict[str, str] = {}
        try:
            with open(path, encoding="utf-8") as f:
                data: Any = json.load(f)
            if isinstance(data, dict):
                bundle = {str(k): v for k, v in data.items() if isinstance(v, str)}
                _logger.debug("locale bundle loaded: %s (%d keys)", path, len(bundle))
            else:
                _logger.warning("locale bundle is not a JSON object: %s", path)
        except (OSError, ValueError) as e:
            _logger.warning("locale bundle load failed: %s", e)
        return cls(bundle)

    def get(self, key: str) -> str:
        if key in self._bundle:
            return self._bundle[key]
        if key in DEFAULT_STRINGS:
            return DEFAULT_STRINGS[key]
        _logger.warning("missing localized string: %s", key)
        return key

    def has(self, key: str) -> bool:
        return key in self._bundle or key in DEFAULT_STRINGS


def _load_default() -> Locale:
    path = (os.getenv("CROP_ASPECT_LOCALE_FILE") or "").strip()
    if path:
        return Locale.from_json(path)
    return Locale()


LOCALE = _load_default()
