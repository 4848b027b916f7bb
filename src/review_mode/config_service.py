"""Where Review Mode keeps its settings, and how they are read back.

Settings live in one JSON document, ``config.json``.  Its directory
depends on the install mode:

* portable: the application directory itself.  Chosen when the host
  passes ``cli_portable=True`` (the CLI's ``--portable``) or when a
  ``portable.flag`` file sits in the application directory.
* per-user: ``%APPDATA%\\ReviewMode`` on Windows, otherwise
  ``$XDG_CONFIG_HOME/ReviewMode`` (``~/.config/ReviewMode`` when the
  variable is unset).

Every document is checked with ``jsonschema`` against
``review_mode/schemas/config.schema.json``.  A broken document on disk
never stops a review: it is logged and the defaults apply.  Writing a
broken document is refused with ``ValueError``.

Example::

    service = ConfigService(app_dir=Path.cwd())
    navigator = ReviewNavigator(service.load_settings())
"""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import jsonschema

from .radix import DEFAULT_SEPARATORS
from .scanner import DEFAULT_IGNORE_RULES, DEFAULT_MIN_SLOTS_MATCHED

logger = logging.getLogger(__name__)

APP_NAME = "ReviewMode"
PACKAGE_SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


def user_config_home() -> Path:
    """Per-user settings directory used outside portable mode."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME


@dataclass(frozen=True)
class ReviewSettings:
    """Typed view of the review configuration."""

    min_slots_matched: int = DEFAULT_MIN_SLOTS_MATCHED
    generalize_digits: bool = True
    separators: str = DEFAULT_SEPARATORS
    ignore_rules: Tuple[str, ...] = DEFAULT_IGNORE_RULES

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ReviewSettings":
        defaults = cls()
        return cls(
            min_slots_matched=int(config.get("min_slots_matched", defaults.min_slots_matched)),
            generalize_digits=bool(config.get("generalize_digits", defaults.generalize_digits)),
            separators=str(config.get("separators", defaults.separators)),
            ignore_rules=tuple(config.get("ignore_rules", defaults.ignore_rules)),
        )

    def to_config(self) -> Dict[str, Any]:
        return {
            "min_slots_matched": self.min_slots_matched,
            "generalize_digits": self.generalize_digits,
            "separators": self.separators,
            "ignore_rules": list(self.ignore_rules),
        }


@dataclass
class ConfigService:
    """Locates, validates, reads and writes the review settings file."""

    app_dir: Path
    flag_name: str = "portable.flag"
    file_name: str = "config.json"
    schema_path: Path = PACKAGE_SCHEMA_DIR / "config.schema.json"
    _portable: Optional[bool] = field(default=None, init=False, repr=False)

    def detect_mode(self, cli_portable: bool = False) -> bool:
        """``True`` for portable mode.  Decided on first call, then fixed."""
        if self._portable is None:
            self._portable = bool(cli_portable) or (self.app_dir / self.flag_name).is_file()
        return self._portable

    def get_config_dir(self, cli_portable: bool = False) -> Path:
        return self.app_dir if self.detect_mode(cli_portable) else user_config_home()

    def get_config_path(self, cli_portable: bool = False) -> Path:
        return self.get_config_dir(cli_portable) / self.file_name

    def validate(self, config: Any) -> None:
        """Raise ``ValueError`` unless ``config`` satisfies the settings schema."""
        schema = json.loads(self.schema_path.read_text(encoding="utf-8"))
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            raise ValueError(f"Invalid configuration: {exc.message}") from exc

    def load_config(self, cli_portable: bool = False) -> Dict[str, Any]:
        """Raw settings document, or ``{}`` when it is missing or broken."""
        path = self.get_config_path(cli_portable)
        if not path.is_file():
            return {}
        try:
            # json.JSONDecodeError is a ValueError too
            config = json.loads(path.read_text(encoding="utf-8"))
            self.validate(config)
        except ValueError as exc:
            logger.warning("Ignoring settings in %s, using defaults: %s", path, exc)
            return {}
        return config

    def save_config(self, config: Dict[str, Any], cli_portable: bool = False) -> None:
        self.validate(config)
        path = self.get_config_path(cli_portable)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config, indent=2), encoding="utf-8")
        logger.debug("Saved settings to %s", path)

    def load_settings(self, cli_portable: bool = False) -> ReviewSettings:
        return ReviewSettings.from_config(self.load_config(cli_portable))

    def save_settings(self, settings: ReviewSettings, cli_portable: bool = False) -> None:
        self.save_config(settings.to_config(), cli_portable)
