"""Typed configuration loading and access.

The optional ``dist.toml`` file at the project root looks like::

    [build]
    out_dir = "dist"
    manifest = "dist/manifest.txt"
    verbose = false
    tgz_signing_key = "keys/release.pem"

    [[targets]]
    name = "docs/tgz"
    source = "docs"
    output = "docs.tgz"   # optional
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table, get_tables

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_OUT_DIR",
    "BuildConfig",
    "BuildOptions",
    "Config",
    "ConfigError",
    "TargetConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "dist.toml"
DEFAULT_OUT_DIR = "dist"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Defaults for ``build`` options; CLI flags take precedence."""

    out_dir: str = DEFAULT_OUT_DIR
    manifest: str | None = None
    verbose: bool = False
    tgz_signing_key: str | None = None


@dataclass(frozen=True, slots=True)
class TargetConfig:
    """A tarball target declared in the config file."""

    name: str
    source: str
    output: str | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    build: BuildConfig = field(default_factory=BuildConfig)
    targets: tuple[TargetConfig, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a ``[[targets]]`` entry is incomplete.
        """
        build: StrDict = get_table(data, "build") or {}
        raw_targets = get_tables(data, "targets")
        if raw_targets is None and "targets" in data:
            raise ValueError("'targets' must be an array of tables")

        targets: list[TargetConfig] = []
        for i, t in enumerate(raw_targets or []):
            name = get_str(t, "name")
            source = get_str(t, "source")
            if name is None or source is None:
                raise ValueError(f"targets[{i}] requires 'name' and 'source'")
            targets.append(TargetConfig(name=name, source=source, output=get_str(t, "output")))

        return cls(
            build=BuildConfig(
                out_dir=get_str(build, "out_dir") or DEFAULT_OUT_DIR,
                manifest=get_str(build, "manifest"),
                verbose=bool(get_bool(build, "verbose")),
                tgz_signing_key=get_str(build, "tgz_signing_key"),
            ),
            targets=tuple(targets),
        )


@dataclass(frozen=True, slots=True)
class BuildOptions:
    """Resolved, immutable options for one ``build`` invocation.

    Constructed once by the command layer from the config file and CLI flags,
    then passed explicitly to each stage.
    """

    root: Path
    out_dir: Path
    manifest: Path | None = None
    verbose: bool = False
    tgz_signing_key: Path | None = None
    timeout: float | None = None

    @classmethod
    def resolve(
        cls,
        config: Config,
        *,
        root: Path,
        out_dir: Path | None = None,
        manifest: Path | None = None,
        verbose: bool | None = None,
        tgz_signing_key: Path | None = None,
        timeout: float | None = None,
    ) -> BuildOptions:
        """Merge CLI overrides over config values.

        Relative config paths are resolved against ``root``. CLI paths are
        kept as given (relative to the process working directory).
        """

        def from_config(value: str | None) -> Path | None:
            if value is None:
                return None
            p = Path(value).expanduser()
            return p if p.is_absolute() else root / p

        return cls(
            root=root,
            out_dir=out_dir or from_config(config.build.out_dir) or root / DEFAULT_OUT_DIR,
            manifest=manifest or from_config(config.build.manifest),
            verbose=config.build.verbose if verbose is None else verbose,
            tgz_signing_key=tgz_signing_key or from_config(config.build.tgz_signing_key),
            timeout=timeout,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {path}: {e.strerror or e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to dist.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path, *, required: bool = False) -> Result[Config, ConfigError]:
    """Load config from ``path``, or return defaults if the file does not exist.

    With ``required=True`` a missing file is an error, as for an explicit
    ``--config`` option.
    """
    if not required and not path.exists():
        return Ok(Config())
    return load_config(path)
