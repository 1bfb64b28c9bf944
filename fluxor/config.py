"""
Config system - layered settings for the discovery pipeline.

Precedence (later overrides earlier):
1. Defaults (``FluxorConfig`` field defaults)
2. ``.env`` file (``FLUXOR_*`` keys)
3. Environment variables (``FLUXOR_*``)
4. Manual overrides
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple
import logging
import os

from dotenv import dotenv_values

from .faults import ConfigInvalidFault

logger = logging.getLogger("fluxor.config")

_LIFETIMES = ("scoped", "request", "singleton")


@dataclass(frozen=True)
class FluxorConfig:
    """Settings consumed by ``add_fluxor`` and the CLI."""

    lifetime: str = "scoped"
    scan_modules: Tuple[str, ...] = field(default_factory=tuple)
    recursive: bool = True
    max_depth: int = 5
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.lifetime not in _LIFETIMES:
            raise ConfigInvalidFault(
                "lifetime", f"expected one of {', '.join(_LIFETIMES)}, got {self.lifetime!r}"
            )
        if self.max_depth < 0:
            raise ConfigInvalidFault("max_depth", "must be >= 0")
        if not isinstance(self.log_level, str) or not _is_level_name(self.log_level):
            raise ConfigInvalidFault("log_level", f"unknown logging level {self.log_level!r}")
        for module in self.scan_modules:
            if not isinstance(module, str) or not all(p.isidentifier() for p in module.split(".")):
                raise ConfigInvalidFault("scan_modules", f"not a dotted module name: {module!r}")


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Example:
        config = ConfigLoader.load(env_file=".env")
        config.lifetime       # "scoped"
        config.scan_modules   # ("my_app.store",)
    """

    def __init__(self, env_prefix: str = "FLUXOR_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        env_prefix: str = "FLUXOR_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> FluxorConfig:
        """
        Build a ``FluxorConfig`` from every source.

        Args:
            env_prefix: Prefix for environment variables
            env_file: Path to .env file (missing files are ignored)
            overrides: Manual overrides (highest precedence)
            environ: Environment mapping (defaults to ``os.environ``)

        Raises:
            ConfigInvalidFault: If a value fails validation
        """
        loader = cls(env_prefix=env_prefix)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env(os.environ if environ is None else environ)

        if overrides:
            loader.config_data.update(overrides)

        return loader.build()

    def build(self) -> FluxorConfig:
        known = {f.name for f in fields(FluxorConfig)}
        unknown = sorted(set(self.config_data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

        values = {k: v for k, v in self.config_data.items() if k in known}
        if "scan_modules" in values:
            values["scan_modules"] = _as_tuple(values["scan_modules"])
        if "lifetime" in values:
            values["lifetime"] = str(values["lifetime"]).lower()
        if "log_level" in values:
            values["log_level"] = _as_level(values["log_level"])
        if "max_depth" in values:
            if isinstance(values["max_depth"], bool):
                raise ConfigInvalidFault("max_depth", f"not an integer: {values['max_depth']!r}")
            try:
                values["max_depth"] = int(values["max_depth"])
            except (TypeError, ValueError):
                raise ConfigInvalidFault("max_depth", f"not an integer: {values['max_depth']!r}")
        if "recursive" in values and not isinstance(values["recursive"], bool):
            raise ConfigInvalidFault("recursive", f"not a boolean: {values['recursive']!r}")
        return FluxorConfig(**values)

    def _load_env_file(self, path: str):
        """Load ``FLUXOR_*`` keys from a .env file."""
        if not os.path.exists(path):
            logger.debug(f"Env file {path} not found, skipping")
            return

        for key, value in dotenv_values(path).items():
            if value is not None and key.startswith(self.env_prefix):
                self._set(key, value)

    def _load_from_env(self, environ: Dict[str, str]):
        for key, value in environ.items():
            if key.startswith(self.env_prefix):
                self._set(key, value)

    def _set(self, key: str, value: str):
        """Convert FLUXOR_SCAN_MODULES to scan_modules."""
        self.config_data[key[len(self.env_prefix):].lower()] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        if "," in value:
            return [part.strip() for part in value.split(",") if part.strip()]

        return value


def _as_tuple(value: Any) -> Tuple[str, ...]:
    if value is None or value == "":
        return ()
    if not isinstance(value, (list, tuple)):
        value = [value]
    items: List[str] = [str(v) for v in value]
    return tuple(items)


def _as_level(value: Any) -> str:
    """Level name for ``value``; numeric levels (``10``) map to their name."""
    if isinstance(value, int) and not isinstance(value, bool):
        name = logging.getLevelName(value)
        if not name.startswith("Level "):
            return name
    return str(value)


def _is_level_name(name: str) -> bool:
    return isinstance(logging.getLevelName(name.upper()), int)


def configure_logging(level: str = "WARNING") -> None:
    """Attach a basic stream handler to the ``fluxor`` logger tree."""
    root = logging.getLogger("fluxor")
    root.setLevel(level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
