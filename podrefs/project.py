"""In-memory model of the generated Pods project hierarchy."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

PODS_GROUP = "Pods"
DEVELOPMENT_PODS_GROUP = "Development Pods"


class ProjectModelError(RuntimeError):
    """Raised when the project hierarchy would become inconsistent."""


@dataclass(frozen=True)
class FileReference:
    """A file (or bundle directory) referenced from a group."""

    path: Path
    group: "Group"

    @property
    def name(self) -> str:
        return self.path.name


class Group:
    """Named node of the project hierarchy."""

    def __init__(self, name: str, path: Optional[Path] = None, parent: Optional["Group"] = None) -> None:
        self.name = name
        self.path = Path(path) if path is not None else None
        self.parent = parent
        self._groups: Dict[str, Group] = {}
        self._files: List[FileReference] = []

    def __repr__(self) -> str:
        return f"<Group {self.hierarchy_path}>"

    @property
    def real_path(self) -> Optional[Path]:
        """Directory on disk this group corresponds to (inherited from parents)."""
        if self.path is not None:
            return self.path
        if self.parent is not None:
            return self.parent.real_path
        return None

    @property
    def hierarchy_path(self) -> str:
        if self.parent is None:
            return "/"
        parent_path = self.parent.hierarchy_path.rstrip("/")
        return f"{parent_path}/{self.name}"

    @property
    def groups(self) -> List["Group"]:
        return list(self._groups.values())

    @property
    def files(self) -> List[FileReference]:
        return list(self._files)

    def find(self, name: str) -> Optional["Group"]:
        return self._groups.get(name)

    def new_group(self, name: str, path: Optional[Path] = None) -> "Group":
        if name in self._groups:
            raise ProjectModelError(f"Group {self.hierarchy_path} already contains a group named {name}")
        group = Group(name, path, parent=self)
        self._groups[name] = group
        return group

    def walk_files(self) -> Iterator[FileReference]:
        yield from self._files
        for group in self._groups.values():
            yield from group.walk_files()

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"name": self.name}
        if self.path is not None:
            payload["path"] = str(self.path)
        if self._files:
            payload["files"] = [str(ref.path) for ref in self._files]
        if self._groups:
            payload["groups"] = [group.to_dict() for group in self._groups.values()]
        return payload


class Project:
    """Pods project with a ``Pods`` and a ``Development Pods`` group."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.main_group = Group("", self.root)
        self.pods = self.main_group.new_group(PODS_GROUP)
        self.development_pods = self.main_group.new_group(DEVELOPMENT_PODS_GROUP)
        self._references: Dict[Path, FileReference] = {}

    def add_pod_group(self, name: str, path: Path, development: bool = False) -> Group:
        parent = self.development_pods if development else self.pods
        if self.pod_group(name) is not None:
            raise ProjectModelError(f"Pod group {name} already exists")
        return parent.new_group(name, path)

    def pod_group(self, name: str) -> Optional[Group]:
        return self.pods.find(name) or self.development_pods.find(name)

    def reference_for_path(self, path: Path) -> Optional[FileReference]:
        return self._references.get(Path(path))

    def new_file(self, group: Group, path: Path) -> FileReference:
        path = Path(path)
        if not path.exists():
            raise ProjectModelError(f"Cannot reference missing file {path}")
        if path in self._references:
            raise ProjectModelError(f"File {path} is already referenced from {self._references[path].group}")
        reference = FileReference(path=path, group=group)
        group._files.append(reference)
        self._references[path] = reference
        return reference

    @property
    def files(self) -> List[FileReference]:
        return list(self.main_group.walk_files())

    def to_dict(self) -> Dict[str, object]:
        return {
            PODS_GROUP: self.pods.to_dict().get("groups", []),
            DEVELOPMENT_PODS_GROUP: self.development_pods.to_dict().get("groups", []),
        }


__all__ = [
    "DEVELOPMENT_PODS_GROUP",
    "FileReference",
    "Group",
    "PODS_GROUP",
    "Project",
    "ProjectModelError",
]
