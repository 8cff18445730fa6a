"""
Runtime configuration for the dashboard.

Defines DashboardSettings, a frozen dataclass read by the Streamlit host at session
start. Defaults come from aigit.core.constants.

Precedence: environment > TOML > defaults.

TOML search order when no path is given:
    1) ./aigit-dashboard.toml (either a [dashboard] table or top-level keys)
    2) ./pyproject.toml under [tool.aigit.dashboard]

Notes:
    - Unreadable or unparsable TOML falls back to defaults.
    - Invalid individual values are skipped, keeping the previous value.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from aigit.core.constants import DEFAULT_DATA_SOURCE, DRAWER_MAX_ITEMS

__all__ = ["DashboardSettings"]

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class DashboardSettings:
    """
    Runtime settings for the dashboard session.

    Attributes:
        data_source (str): Bootstrap source; an http(s) URL or a local path.
        fetch_timeout (float | None): Network timeout in seconds; None disables it.
        drawer_max_items (int): Transcripts listed in the drill-down drawer (>= 1).
        page_title (str): Browser page title and topbar brand.
        log_level (str): Root logging level name.

    Examples:
        >>> DashboardSettings(data_source="https://ci.example/data.json").drawer_max_items
        30
    """

    data_source: str = DEFAULT_DATA_SOURCE
    fetch_timeout: float | None = None
    drawer_max_items: int = DRAWER_MAX_ITEMS
    page_title: str = "aigit / dashboard"
    log_level: str = "WARNING"

    @classmethod
    def _apply_mapping(cls, base: DashboardSettings, cfg: dict[str, Any] | None) -> DashboardSettings:
        """Apply a loose config mapping, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if isinstance(cfg.get("data_source"), str) and cfg["data_source"].strip():
            s = replace(s, data_source=cfg["data_source"].strip())

        if "fetch_timeout" in cfg:
            try:
                t = float(cfg["fetch_timeout"])
                s = replace(s, fetch_timeout=t if t > 0 else None)
            except (TypeError, ValueError):
                pass

        if "drawer_max_items" in cfg:
            try:
                n = int(cfg["drawer_max_items"])
                if n >= 1:
                    s = replace(s, drawer_max_items=n)
            except (TypeError, ValueError):
                pass

        if isinstance(cfg.get("page_title"), str):
            s = replace(s, page_title=cfg["page_title"])

        if isinstance(cfg.get("log_level"), str):
            lvl = cfg["log_level"].strip().upper()
            if lvl in _LEVELS:
                s = replace(s, log_level=lvl)

        return s

    @classmethod
    def from_env(
        cls, base: DashboardSettings | None = None, prefix: str = "AIGIT_DASH_"
    ) -> DashboardSettings:
        """
        Build settings from environment variables on top of ``base`` (or defaults).

        Recognized variables:
            - AIGIT_DASH_DATA_SOURCE
            - AIGIT_DASH_FETCH_TIMEOUT (seconds; 0 disables)
            - AIGIT_DASH_DRAWER_MAX_ITEMS
            - AIGIT_DASH_PAGE_TITLE
            - AIGIT_DASH_LOG_LEVEL
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for name in ("data_source", "fetch_timeout", "drawer_max_items", "page_title", "log_level"):
            v = os.getenv(prefix + name.upper())
            if v:
                mapping[name] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> DashboardSettings:
        """Build settings from a TOML file, or defaults when none is found."""
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "aigit-dashboard.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logging.getLogger(__name__).warning("ignoring unreadable settings file %s: %s", p, e)
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                aigit = tool.get("aigit", {}) if isinstance(tool, dict) else {}
                cfg = aigit.get("dashboard") if isinstance(aigit, dict) else None
            elif isinstance(data.get("dashboard"), dict):
                cfg = data["dashboard"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> DashboardSettings:
        """Load settings applying precedence: environment > TOML > defaults."""
        return cls.from_env(base=cls.from_toml(path))
