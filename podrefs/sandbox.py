"""Sandbox holding the pods and header stores of an installation."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping

from .headers_store import BUILD, PUBLIC, HeadersStore
from .models import root_name


class Sandbox:
    """Directory where pods are installed, plus the public header store."""

    def __init__(
        self,
        root: Path,
        *,
        pod_dirs: Mapping[str, Path] | None = None,
        development_pods: Mapping[str, Path] | None = None,
    ) -> None:
        self.root = Path(root)
        self._pod_dirs: Dict[str, Path] = {name: Path(path) for name, path in (pod_dirs or {}).items()}
        self._development_pods: Dict[str, Path] = {
            name: Path(path) for name, path in (development_pods or {}).items()
        }
        self.public_headers = HeadersStore(self.headers_root / "Public", PUBLIC)
        self._build_headers: Dict[str, HeadersStore] = {}

    @property
    def headers_root(self) -> Path:
        return self.root / "Headers"

    def build_headers_for(self, target_name: str) -> HeadersStore:
        """Return the build-only header store of a target, creating it on first use."""
        store = self._build_headers.get(target_name)
        if store is None:
            store = HeadersStore(self.headers_root / "Private" / target_name, BUILD)
            self._build_headers[target_name] = store
        return store

    def local(self, name: str) -> bool:
        """Return True when the pod is referenced by a local path."""
        return root_name(name) in self._development_pods

    def pod_dir(self, name: str) -> Path:
        pod_name = root_name(name)
        if pod_name in self._development_pods:
            return self._development_pods[pod_name]
        if pod_name in self._pod_dirs:
            return self._pod_dirs[pod_name]
        return self.root / pod_name

    def store_development_pod(self, name: str, path: Path) -> None:
        self._development_pods[root_name(name)] = Path(path)

    def store_pod_dir(self, name: str, path: Path) -> None:
        self._pod_dirs[root_name(name)] = Path(path)


__all__ = ["Sandbox"]
