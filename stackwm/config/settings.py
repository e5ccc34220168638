"""
stackwm.config.settings - Static configuration.

Settings are read once at startup and never change afterwards.  They
can be built in code, from a plain mapping, or from a TOML file:

    margin = 5
    workspaces = ["U", "I", "O", "P", "7", "8", "9", "0"]
    float_titles = ["Picture-in-Picture"]
    float_apps = ["calc.exe"]
    enlarge_ratio = 0.9

    [app_workspace]
    "emacs.exe" = "7"

Any violation raises ConfigError; the WM must not start with an
invalid configuration.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any

from stackwm.tiling.geometry import DEFAULT_ENLARGE_RATIO

log = logging.getLogger(__name__)


DEFAULT_WORKSPACES: tuple[str, ...] = ("U", "I", "O", "P", "7", "8", "9", "0")


class ConfigError(ValueError):
    """Raised when the configuration is invalid (fatal at startup)."""
    pass


@dataclass(frozen=True)
class Settings:
    """
    Static WM configuration.

    Attributes:
        margin:        Gap in pixels between windows and screen edges.
        workspaces:    Ordered workspace names; the first one is active
                       at startup.  Each name is a single printable key.
        float_titles:  Window titles that float by default.
        float_apps:    Application identities that float by default.
        app_workspace: Application identity -> default workspace name.
        enlarge_ratio: Fraction of the usable width for an enlarged window.
    """

    margin: int = 5
    workspaces: tuple[str, ...] = DEFAULT_WORKSPACES
    float_titles: frozenset[str] = frozenset({"Picture-in-Picture"})
    float_apps: frozenset[str] = frozenset()
    app_workspace: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    enlarge_ratio: float = DEFAULT_ENLARGE_RATIO

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self) -> Settings:
        """
        Check every invariant of the configuration.

        Returns:
            self, so it can be chained.

        Raises:
            ConfigError: On the first violation found.
        """
        if not self.workspaces:
            raise ConfigError("no workspaces defined")

        seen: set[str] = set()
        folded: set[str] = set()
        for name in self.workspaces:
            if not isinstance(name, str) or len(name) != 1:
                raise ConfigError(
                    f"workspace name must be a single character: {name!r}"
                )
            if not name.isprintable() or name.isspace():
                raise ConfigError(
                    f"workspace name must be a printable character: {name!r}"
                )
            if name in seen:
                raise ConfigError(f"duplicate workspace name: {name!r}")
            # Hotkeys are case-insensitive: "u" and "U" share Alt+U
            if name.lower() in folded:
                raise ConfigError(
                    f"workspace names differ only by case: {name!r}"
                )
            seen.add(name)
            folded.add(name.lower())

        for app, ws in self.app_workspace.items():
            if ws not in seen:
                raise ConfigError(f"appWorkspace {app} -> {ws} is invalid")

        if self.margin < 0:
            raise ConfigError(f"margin must be >= 0, got {self.margin}")

        if not 0 < self.enlarge_ratio <= 1:
            raise ConfigError(
                f"enlarge_ratio must be in (0, 1], got {self.enlarge_ratio}"
            )

        return self

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Settings:
        """Build validated Settings from a plain mapping (e.g. parsed TOML)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown settings: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        if "margin" in data:
            kwargs["margin"] = _as_int("margin", data["margin"])
        if "workspaces" in data:
            kwargs["workspaces"] = tuple(
                _as_str_list("workspaces", data["workspaces"])
            )
        if "float_titles" in data:
            kwargs["float_titles"] = frozenset(
                _as_str_list("float_titles", data["float_titles"])
            )
        if "float_apps" in data:
            kwargs["float_apps"] = frozenset(
                _as_str_list("float_apps", data["float_apps"])
            )
        if "app_workspace" in data:
            kwargs["app_workspace"] = MappingProxyType(
                _as_str_mapping("app_workspace", data["app_workspace"])
            )
        if "enlarge_ratio" in data:
            kwargs["enlarge_ratio"] = _as_float(
                "enlarge_ratio", data["enlarge_ratio"]
            )

        return cls(**kwargs).validate()

    @classmethod
    def from_toml(cls, path: str | Path) -> Settings:
        """Load and validate Settings from a TOML file."""
        path = Path(path)
        try:
            with path.open("rb") as fp:
                data = tomllib.load(fp)
        except OSError as exc:
            raise ConfigError(f"cannot read config {path}: {exc}") from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc

        log.info("Config loaded from %s", path)
        return cls.from_mapping(data)


# ============================================================================
# Type checks for raw (TOML) values
# ============================================================================
def _as_int(key: str, value: Any) -> int:
    # bool is an int subclass; `margin = true` is a typo, not 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return value


def _as_float(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    return float(value)


def _as_str_list(key: str, value: Any) -> list[str]:
    # A bare string would otherwise iterate into single characters
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"{key} entries must be strings, got {item!r}")
    return list(value)


def _as_str_mapping(key: str, value: Any) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{key} must be a table, got {value!r}")
    for k, v in value.items():
        if not isinstance(k, str) or not isinstance(v, str):
            raise ConfigError(
                f"{key} entries must map strings to strings: {k!r} = {v!r}"
            )
    return dict(value)
