"""Computes where each header of a pod is linked inside the headers sandbox.

Every pod gets a namespace root named after its root spec, so ``Core/UI``
and ``Core/Net`` share ``Core``. Ordinary headers are flattened into that
namespace (plus the optional ``header_dir``) unless the consumer declares a
``header_mappings_dir``, in which case the layout below that directory is
preserved. Headers shipped inside vendored ``.framework`` bundles never go
through the ordinary mapping: they are namespaced by framework name and
always keep their layout relative to the bundle's ``Headers`` directory.
"""

from __future__ import annotations

import posixpath
import re
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from .file_accessor import (
    FileAccessor,
    vendored_frameworks_headers,
    vendored_frameworks_headers_dir,
)

_FRAMEWORK_SEGMENT = re.compile(r"\.framework/")


class MissingInputError(ValueError):
    """Raised when a header does not live below the declared header mappings dir."""

    def __init__(self, header: Path, mappings_dir: Path) -> None:
        super().__init__(
            f"Header {header} is not inside the header mappings directory {mappings_dir}"
        )
        self.header = header
        self.mappings_dir = mappings_dir


class HeaderMapping:
    """Ordered mapping of destination sub-directory to the headers linked there."""

    def __init__(self) -> None:
        self._buckets: Dict[PurePosixPath, List[Path]] = {}

    def add(self, destination: PurePosixPath, header: Path) -> None:
        self._buckets.setdefault(destination, []).append(header)

    def items(self) -> Iterator[Tuple[PurePosixPath, List[Path]]]:
        for destination, headers in self._buckets.items():
            yield destination, list(headers)

    def destinations(self) -> List[PurePosixPath]:
        return list(self._buckets)

    def headers(self) -> List[Path]:
        return [header for bucket in self._buckets.values() for header in bucket]

    def __getitem__(self, destination: PurePosixPath) -> List[Path]:
        return list(self._buckets[destination])

    def __contains__(self, destination: object) -> bool:
        return destination in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)

    def __bool__(self) -> bool:
        return bool(self._buckets)

    def to_dict(self) -> Dict[str, List[str]]:
        return {str(dest): [str(path) for path in headers] for dest, headers in self.items()}


def is_framework_header(path: Path) -> bool:
    """Return True for headers located inside a ``.framework`` bundle."""
    return bool(_FRAMEWORK_SEGMENT.search(path.as_posix()))


def header_mappings(
    headers_sandbox: PurePosixPath,
    file_accessor: FileAccessor,
    headers: Iterable[Path],
) -> HeaderMapping:
    """Map ordinary headers to their destination below ``headers_sandbox``.

    Headers inside ``.framework`` bundles are skipped; they are mapped by
    :func:`vendored_frameworks_header_mappings`.
    """
    consumer = file_accessor.spec_consumer
    base = PurePosixPath(headers_sandbox)
    if consumer.header_dir:
        base = base / consumer.header_dir

    mappings_dir: Path | None = None
    if consumer.header_mappings_dir:
        mappings_dir = file_accessor.root / consumer.header_mappings_dir

    mapping = HeaderMapping()
    for header in headers:
        if is_framework_header(header):
            continue
        destination = base
        if mappings_dir is not None:
            destination = base / _relative_dirname(header, mappings_dir)
        mapping.add(_normalise(destination), header)
    return mapping


def vendored_frameworks_header_mappings(
    headers_sandbox: PurePosixPath, file_accessor: FileAccessor
) -> HeaderMapping:
    """Map the headers of each vendored framework, keeping their nested layout."""
    mapping = HeaderMapping()
    for framework in file_accessor.vendored_frameworks():
        headers_dir = vendored_frameworks_headers_dir(framework)
        framework_root = PurePosixPath(headers_sandbox) / framework.stem
        for header in vendored_frameworks_headers(framework):
            destination = framework_root / _relative_dirname(header, headers_dir)
            mapping.add(_normalise(destination), header)
    return mapping


def find_collisions(mappings: Sequence[Tuple[str, HeaderMapping]]) -> Dict[PurePosixPath, List[str]]:
    """Return destinations shared by more than one owner (e.g. pod name)."""
    owners: Dict[PurePosixPath, List[str]] = {}
    for owner, mapping in mappings:
        for destination in mapping.destinations():
            names = owners.setdefault(destination, [])
            if owner not in names:
                names.append(owner)
    return {dest: names for dest, names in owners.items() if len(names) > 1}


def _relative_dirname(header: Path, directory: Path) -> PurePosixPath:
    try:
        relative = header.relative_to(directory)
    except ValueError as exc:
        raise MissingInputError(header, directory) from exc
    return PurePosixPath(relative.as_posix()).parent


def _normalise(destination: PurePosixPath) -> PurePosixPath:
    # "Core/../Shared" and "Net/../Shared" link into the same directory.
    return PurePosixPath(posixpath.normpath(str(destination)))


__all__ = [
    "HeaderMapping",
    "MissingInputError",
    "find_collisions",
    "header_mappings",
    "is_framework_header",
    "vendored_frameworks_header_mappings",
]
