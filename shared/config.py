"""
Pescope Configuration Management
=================================

Settings for the pescope toolkit expressed as Python dataclasses with
optional TOML persistence.

Configuration is opt-in: :meth:`PescopeConfig.load` without a path returns
the built-in defaults and never touches the filesystem or the environment.
A TOML file is read only when the caller names one explicitly.

Example file::

    [global]
    log_level = "DEBUG"
    log_file = "pescope.log"
    log_json = true

    [inspect]
    max_file_size = 16777216

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
    - PEP 680 -- tomllib: Support for Parsing TOML in the Standard Library.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


#: Largest input accepted by the byte source (64 MiB).
DEFAULT_MAX_FILE_SIZE: int = 64 * 1024 * 1024


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class InspectConfig:
    """Configuration for the PE inspector.

    Controls the input size cap applied before any byte reaches the parser
    and the layout of JSON reports.
    """

    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    json_indent: int = 2


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Logging settings shared by every pescope command.

    The default level is ``WARNING`` so that a normal run writes nothing
    but the report.
    """

    log_level: str = "WARNING"
    log_file: str = ""  # empty disables file logging
    log_json: bool = False


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class PescopeConfig:
    """Master configuration aggregating global and tool settings.

    Usage:
        >>> config = PescopeConfig.load()                  # defaults only
        >>> config = PescopeConfig.load("pescope.toml")    # from a file
        >>> config.inspect.max_file_size
        67108864
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    inspect: InspectConfig = field(default_factory=InspectConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> PescopeConfig:
        """Load configuration from a TOML file.

        Missing keys fall back to dataclass defaults; unknown keys are
        ignored.

        Args:
            path: Filesystem path to a TOML configuration file, or ``None``
                  for the built-in defaults.

        Returns:
            A fully-populated :class:`PescopeConfig` instance.

        Raises:
            FileNotFoundError: If *path* is given and does not exist.
            tomllib.TOMLDecodeError: If the file is not valid TOML.
            ValueError: If a section or value has the wrong type.
        """
        if path is None:
            return cls()

        config_path = Path(path)
        if not config_path.is_file():
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}"
            )

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, "global", raw.get("global", {})),
            inspect=cls._build_section(InspectConfig, "inspect", raw.get("inspect", {})),
        )

    # ------------------------------------------------------------------ #
    #  Serialisation helpers
    # ------------------------------------------------------------------ #

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, name: str, data: Any) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Each value must have the same type as the field's default.

        Raises:
            ValueError: If the section is not a table or a value has the
                        wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"[{name}] must be a table")

        filtered: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            expected = type(f.default)
            # bool is a subclass of int
            if (type(value) is bool and expected is not bool) or not isinstance(value, expected):
                raise ValueError(
                    f"{name}.{f.name} must be of type {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
            filtered[f.name] = value
        return cls(**filtered)
