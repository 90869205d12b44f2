"""Core data models shared across podrefs components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .file_accessor import FileAccessor
    from .headers_store import HeadersStore


@dataclass(frozen=True)
class Platform:
    """Platform a target is compiled for."""

    name: str
    deployment_target: Optional[str] = None

    def __str__(self) -> str:
        return self.name


@dataclass
class SpecConsumer:
    """Build settings of a specification resolved for one platform."""

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
class Specification:
    """A pod or one of its (possibly nested) subspecs, e.g. ``Core/UI``."""

    name: str
    consumer: SpecConsumer = field(default_factory=SpecConsumer)

    @property
    def root_name(self) -> str:
        return root_name(self.name)

    @property
    def is_subspec(self) -> bool:
        return self.name != self.root_name

    @property
    def subspec_names(self) -> List[str]:
        """Nested subspec components below the root, outermost first."""
        return subspec_names(self.name)


@dataclass
class PodTarget:
    """One platform-specific compiled unit of the generated project."""

    name: str
    platform: Platform
    file_accessors: List["FileAccessor"]
    build_headers: "HeadersStore"


def root_name(spec_name: str) -> str:
    """Return the name of the root pod for a spec or subspec name."""
    return spec_name.split("/", 1)[0]


def subspec_names(spec_name: str) -> List[str]:
    """Return the subspec components of a spec name, e.g. ``["UI", "Views"]``."""
    return spec_name.split("/")[1:]


__all__ = ["Platform", "PodTarget", "SpecConsumer", "Specification", "root_name", "subspec_names"]
