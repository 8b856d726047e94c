"""Persist and load CLI service profiles."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict

from crickstats.config.settings import Settings


@dataclass
class ServiceProfile:
    settings_overrides: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "ServiceProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(settings_overrides=data.get("settings", {}))

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceProfile":
        payload = asdict(settings)
        payload.pop("session_key", None)
        return cls(settings_overrides=payload)

    def apply(self, settings: Settings) -> Settings:
        return settings.with_overrides(self.settings_overrides)

    def save(self, path: Path) -> None:
        payload = {"settings": self.settings_overrides}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
