"""Categorised view of the files a specification contributes on one platform."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, List, Set

from .models import Platform, SpecConsumer, Specification
from .path_list import PathList

HEADER_EXTENSIONS = (".h", ".hh", ".hpp", ".ipp", ".tpp", ".hxx", ".def")

FRAMEWORK_EXTENSION = ".framework"


def is_header(path: Path) -> bool:
    return path.suffix.lower() in HEADER_EXTENSIONS


class FileAccessor:
    """Resolves the file patterns of a spec consumer against a pod's path list."""

    def __init__(self, path_list: PathList, spec: Specification, platform: Platform) -> None:
        self.path_list = path_list
        self.spec = spec
        self.platform = platform

    def __repr__(self) -> str:
        return f"<FileAccessor {self.spec.name} {self.platform}>"

    @property
    def spec_consumer(self) -> SpecConsumer:
        return self.spec.consumer

    @property
    def root(self) -> Path:
        return self.path_list.root

    def source_files(self) -> List[Path]:
        return self._glob(self.spec_consumer.source_files)

    def headers(self) -> List[Path]:
        """Source files with a header extension."""
        return [path for path in self.source_files() if is_header(path)]

    def public_headers(self) -> List[Path]:
        headers = self.headers()
        private = set(self.private_headers())
        if self.spec_consumer.public_header_files:
            declared = set(self._glob(self.spec_consumer.public_header_files))
            headers = [path for path in headers if path in declared]
        return [path for path in headers if path not in private]

    def private_headers(self) -> List[Path]:
        if not self.spec_consumer.private_header_files:
            return []
        declared = set(self._glob(self.spec_consumer.private_header_files))
        return [path for path in self.headers() if path in declared]

    def resources(self) -> List[Path]:
        return self._glob(self.spec_consumer.resources)

    def resource_bundle_files(self) -> List[Path]:
        files: List[Path] = []
        seen: Set[Path] = set()
        for patterns in self.spec_consumer.resource_bundles.values():
            for path in self._glob(patterns):
                if path not in seen:
                    seen.add(path)
                    files.append(path)
        return files

    def vendored_frameworks(self) -> List[Path]:
        matches = self.path_list.glob(
            self.spec_consumer.vendored_frameworks,
            self.spec_consumer.exclude_files,
            include_dirs=True,
        )
        return [path for path in matches if path.suffix == FRAMEWORK_EXTENSION and path.is_dir()]

    def vendored_libraries(self) -> List[Path]:
        return self._glob(self.spec_consumer.vendored_libraries)

    def _glob(self, patterns: List[str]) -> List[Path]:
        return self.path_list.glob(patterns, self.spec_consumer.exclude_files)


def vendored_frameworks_headers_dir(framework: Path) -> Path:
    """Return the directory holding the public headers of a framework bundle."""
    return framework / "Headers"


def vendored_frameworks_headers(framework: Path) -> List[Path]:
    """Return every header inside the headers directory of a framework bundle."""
    headers_dir = vendored_frameworks_headers_dir(framework)
    if not headers_dir.is_dir():
        return []
    return sorted(path for path in headers_dir.rglob("*") if path.is_file() and is_header(path))


class FileCategory(Enum):
    """File lists a file accessor exposes, each bound to its accessor method."""

    SOURCE_FILES = ("source_files", FileAccessor.source_files)
    HEADERS = ("headers", FileAccessor.headers)
    PUBLIC_HEADERS = ("public_headers", FileAccessor.public_headers)
    RESOURCES = ("resources", FileAccessor.resources)
    RESOURCE_BUNDLE_FILES = ("resource_bundle_files", FileAccessor.resource_bundle_files)
    VENDORED_FRAMEWORKS = ("vendored_frameworks", FileAccessor.vendored_frameworks)
    VENDORED_LIBRARIES = ("vendored_libraries", FileAccessor.vendored_libraries)

    def __init__(self, label: str, accessor: Callable[[FileAccessor], List[Path]]) -> None:
        self.label = label
        self._accessor = accessor

    def paths(self, file_accessor: FileAccessor) -> List[Path]:
        return self._accessor(file_accessor)


__all__ = [
    "FRAMEWORK_EXTENSION",
    "FileAccessor",
    "FileCategory",
    "HEADER_EXTENSIONS",
    "is_header",
    "vendored_frameworks_headers",
    "vendored_frameworks_headers_dir",
]
