"""Decides which project group a pod's files are referenced from."""

from __future__ import annotations

import threading
from enum import Enum
from pathlib import Path
from typing import Optional

from .models import root_name, subspec_names
from .project import FileReference, Group, Project
from .sandbox import Sandbox


class GroupCategory(Enum):
    """Sub-group of a pod group a file category lands in."""

    DEFAULT = None
    FRAMEWORKS = "Frameworks"
    RESOURCES = "Resources"

    @property
    def group_name(self) -> Optional[str]:
        return self.value


class GroupClassifier:
    """Get-or-create access to pod groups and file references.

    Groups are keyed by spec name and category: the pod group of the root
    spec, then the category sub-group, then one nested group per subspec.
    """

    def __init__(self, project: Project, sandbox: Sandbox) -> None:
        self.project = project
        self.sandbox = sandbox
        self._lock = threading.RLock()

    def group_for(self, spec_name: str, category: GroupCategory = GroupCategory.DEFAULT) -> Group:
        with self._lock:
            group = self._pod_group(root_name(spec_name))
            if category.group_name is not None:
                group = _child(group, category.group_name)
            for name in subspec_names(spec_name):
                group = _child(group, name)
            return group

    def add_file_reference(
        self, path: Path, group: Group, reflect_file_system_structure: bool = False
    ) -> FileReference:
        """Reference ``path`` from ``group``, at most once per path.

        With ``reflect_file_system_structure`` the file is nested in
        sub-groups mirroring its directories relative to the group's
        directory on disk.
        """
        path = Path(path)
        with self._lock:
            existing = self.project.reference_for_path(path)
            if existing is not None:
                return existing
            if reflect_file_system_structure:
                group = self._mirrored_group(path, group)
            return self.project.new_file(group, path)

    def _pod_group(self, pod_name: str) -> Group:
        group = self.project.pod_group(pod_name)
        if group is None:
            group = self.project.add_pod_group(
                pod_name,
                self.sandbox.pod_dir(pod_name),
                development=self.sandbox.local(pod_name),
            )
        return group

    @staticmethod
    def _mirrored_group(path: Path, group: Group) -> Group:
        base = group.real_path
        if base is None:
            return group
        try:
            relative_dir = path.parent.relative_to(base)
        except ValueError:
            return group
        folder = base
        for name in relative_dir.parts:
            folder = folder / name
            existing = group.find(name)
            group = existing if existing is not None else group.new_group(name, folder)
        return group


def _child(group: Group, name: str) -> Group:
    existing = group.find(name)
    return existing if existing is not None else group.new_group(name)


__all__ = ["GroupCategory", "GroupClassifier"]
