"""Header search path stores (build-only and public)."""

from __future__ import annotations

import threading
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, List

from .logging import get_logger
from .models import Platform

BUILD = "build"
PUBLIC = "public"


class HeadersStore:
    """Records header search roots and header link destinations per platform.

    The store only accumulates: search paths are appended once, and headers
    added to a namespace that already has entries are appended to that
    bucket. Linking the files on disk is left to the consumer of the store.
    """

    def __init__(self, root: Path, visibility: str) -> None:
        if visibility not in (BUILD, PUBLIC):
            raise ValueError(f"Unknown header visibility: {visibility}")
        self.root = Path(root)
        self.visibility = visibility
        # Keyed by platform name: targets of one platform share a bucket
        # whatever their deployment target.
        self._search_paths: Dict[str, List[PurePosixPath]] = {}
        self._mappings: Dict[str, Dict[PurePosixPath, List[Path]]] = {}
        self._lock = threading.Lock()
        self.logger = get_logger("headers_store")

    def __repr__(self) -> str:
        return f"<HeadersStore {self.visibility} {self.root}>"

    def add_search_path(self, path: PurePosixPath, platform: Platform) -> None:
        path = PurePosixPath(path)
        with self._lock:
            paths = self._search_paths.setdefault(platform.name, [])
            if path not in paths:
                paths.append(path)

    def add_files(
        self, namespace: PurePosixPath, files: Iterable[Path], platform: Platform
    ) -> List[PurePosixPath]:
        """Record ``files`` under ``namespace`` and return their link paths."""
        namespace = PurePosixPath(namespace)
        added: List[PurePosixPath] = []
        with self._lock:
            bucket = self._mappings.setdefault(platform.name, {}).setdefault(namespace, [])
            for path in files:
                path = Path(path)
                if path not in bucket:
                    bucket.append(path)
                added.append(namespace / path.name)
        if added:
            self.logger.debug(
                "Recorded %d %s header(s) in %s for %s", len(added), self.visibility, namespace, platform
            )
        return added

    def platforms(self) -> List[str]:
        """Names of the platforms with recorded search paths or headers."""
        return sorted(set(self._search_paths) | set(self._mappings))

    def search_paths(self, platform: Platform | str) -> List[str]:
        """Absolute header search paths for a platform, root first."""
        paths = [str(self.root)]
        paths.extend(str(self.root / path) for path in self._search_paths.get(_name(platform), []))
        return paths

    def mappings(self, platform: Platform | str) -> Dict[PurePosixPath, List[Path]]:
        return {
            namespace: list(files)
            for namespace, files in self._mappings.get(_name(platform), {}).items()
        }

    def to_dict(self) -> Dict[str, object]:
        return {
            platform: {
                "search_paths": self.search_paths(platform),
                "headers": {
                    str(namespace): [str(path) for path in files]
                    for namespace, files in self.mappings(platform).items()
                },
            }
            for platform in self.platforms()
        }


def _name(platform: Platform | str) -> str:
    return platform.name if isinstance(platform, Platform) else platform


__all__ = ["BUILD", "HeadersStore", "PUBLIC"]
