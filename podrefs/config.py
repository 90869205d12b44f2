"""Configuration loading for podrefs (.podrefs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".podrefs.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SpecConfig:
    """A spec or subspec contributing files to a target."""

    name: str
    root: Path
    local: bool = False
    header_dir: Optional[str] = None
    header_mappings_dir: Optional[str] = None
    source_files: List[str] = field(default_factory=list)
    exclude_files: List[str] = field(default_factory=list)
    public_header_files: List[str] = field(default_factory=list)
    private_header_files: List[str] = field(default_factory=list)
    resources: List[str] = field(default_factory=list)
    resource_bundles: Dict[str, List[str]] = field(default_factory=dict)
    vendored_frameworks: List[str] = field(default_factory=list)
    vendored_libraries: List[str] = field(default_factory=list)


@dataclass
class TargetConfig:
    """A pod target compiled for one platform."""

    name: str
    platform: str
    deployment_target: Optional[str] = None
    specs: List[SpecConfig] = field(default_factory=list)


@dataclass
class PodrefsConfig:
    """Represents the installation described in .podrefs.yml."""

    root: Path
    sandbox: Path
    targets: List[TargetConfig] = field(default_factory=list)


def load_config(config_path: Path) -> PodrefsConfig:
    """Load an installation manifest from disk."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Manifest not found: {config_file}")
    root = config_file.parent.resolve()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    sandbox = root / (_as_str(data.get("sandbox")) or "Pods")

    targets_data = data.get("targets")
    if targets_data is None:
        targets_data = []
    if not isinstance(targets_data, list):
        raise ConfigError("'targets' must be a list")

    targets = [_parse_target(item, root, sandbox, index) for index, item in enumerate(targets_data)]
    return PodrefsConfig(root=root, sandbox=sandbox, targets=targets)


def _parse_target(data: Any, root: Path, sandbox: Path, index: int) -> TargetConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"targets[{index}] must be a mapping")
    name = _as_str(data.get("name"))
    if not name:
        raise ConfigError(f"targets[{index}] is missing 'name'")
    platform = _as_str(data.get("platform"))
    if not platform:
        raise ConfigError(f"Target {name} is missing 'platform'")

    specs_data = data.get("specs") or []
    if not isinstance(specs_data, list):
        raise ConfigError(f"Target {name}: 'specs' must be a list")

    return TargetConfig(
        name=name,
        platform=platform,
        deployment_target=_as_str(data.get("deployment_target")),
        specs=[_parse_spec(item, root, sandbox, name) for item in specs_data],
    )


def _parse_spec(data: Any, root: Path, sandbox: Path, target_name: str) -> SpecConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"Target {target_name}: every spec must be a mapping")
    name = _as_str(data.get("name"))
    if not name:
        raise ConfigError(f"Target {target_name}: spec is missing 'name'")

    local = _as_bool(data.get("local")) or False
    root_str = _as_str(data.get("path"))
    if root_str:
        spec_root = (root / root_str).resolve()
    else:
        spec_root = sandbox / name.split("/", 1)[0]

    bundles_data = data.get("resource_bundles")
    if bundles_data is not None and not isinstance(bundles_data, dict):
        raise ConfigError(f"Spec {name}: 'resource_bundles' must be a mapping")
    resource_bundles = {
        str(bundle): _as_str_list(patterns) for bundle, patterns in (bundles_data or {}).items()
    }

    return SpecConfig(
        name=name,
        root=spec_root,
        local=local,
        header_dir=_as_str(data.get("header_dir")),
        header_mappings_dir=_as_str(data.get("header_mappings_dir")),
        source_files=_as_str_list(data.get("source_files")),
        exclude_files=_as_str_list(data.get("exclude_files")),
        public_header_files=_as_str_list(data.get("public_header_files")),
        private_header_files=_as_str_list(data.get("private_header_files")),
        resources=_as_str_list(data.get("resources")),
        resource_bundles=resource_bundles,
        vendored_frameworks=_as_str_list(data.get("vendored_frameworks")),
        vendored_libraries=_as_str_list(data.get("vendored_libraries")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "PodrefsConfig",
    "SpecConfig",
    "TargetConfig",
    "load_config",
]
