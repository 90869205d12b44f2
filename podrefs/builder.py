"""Builds the sandbox, project and pod targets described by a manifest."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from .config import PodrefsConfig, SpecConfig
from .file_accessor import FileAccessor
from .installer import FileReferencesInstaller, InstallReport
from .models import Platform, PodTarget, SpecConsumer, Specification, root_name
from .path_list import PathList
from .project import Project
from .sandbox import Sandbox


@dataclass
class Installation:
    """Everything the file references installer operates on."""

    sandbox: Sandbox
    project: Project
    pod_targets: List[PodTarget]

    def installer(self, *, max_workers: int = 1) -> FileReferencesInstaller:
        return FileReferencesInstaller(
            self.sandbox, self.pod_targets, self.project, max_workers=max_workers
        )

    def layout(self, report: InstallReport) -> Dict[str, object]:
        """JSON-ready description of the installed groups and header links."""
        build = {target.name: target.build_headers.to_dict() for target in self.pod_targets}
        return {
            "groups": self.project.to_dict(),
            "headers": {
                "build": build,
                "public": self.sandbox.public_headers.to_dict(),
            },
            "file_references": report.file_references,
            "collisions": [
                {
                    "visibility": collision.visibility,
                    "platform": str(collision.platform),
                    "destination": str(collision.destination),
                    "pods": list(collision.pods),
                }
                for collision in report.collisions
            ],
        }


def build_installation(config: PodrefsConfig) -> Installation:
    """Create the objects for an installation run from a loaded manifest."""
    sandbox = Sandbox(config.sandbox)
    project = Project(config.sandbox)
    path_lists: Dict[Path, PathList] = {}

    pod_targets: List[PodTarget] = []
    for target in config.targets:
        platform = Platform(target.platform, target.deployment_target)
        file_accessors: List[FileAccessor] = []
        for spec in target.specs:
            _register_pod(sandbox, spec)
            # Subspecs of one pod share the listing of the pod root.
            path_list = path_lists.setdefault(spec.root, PathList(spec.root))
            file_accessors.append(FileAccessor(path_list, _specification(spec), platform))
        pod_targets.append(
            PodTarget(
                name=target.name,
                platform=platform,
                file_accessors=file_accessors,
                build_headers=sandbox.build_headers_for(target.name),
            )
        )
    return Installation(sandbox=sandbox, project=project, pod_targets=pod_targets)


def _register_pod(sandbox: Sandbox, spec: SpecConfig) -> None:
    pod_name = root_name(spec.name)
    if spec.local:
        sandbox.store_development_pod(pod_name, spec.root)
    else:
        sandbox.store_pod_dir(pod_name, spec.root)


def _specification(spec: SpecConfig) -> Specification:
    consumer = SpecConsumer(
        header_dir=spec.header_dir,
        header_mappings_dir=spec.header_mappings_dir,
        source_files=list(spec.source_files),
        exclude_files=list(spec.exclude_files),
        public_header_files=list(spec.public_header_files),
        private_header_files=list(spec.private_header_files),
        resources=list(spec.resources),
        resource_bundles={name: list(patterns) for name, patterns in spec.resource_bundles.items()},
        vendored_frameworks=list(spec.vendored_frameworks),
        vendored_libraries=list(spec.vendored_libraries),
    )
    return Specification(name=spec.name, consumer=consumer)


__all__ = ["Installation", "build_installation"]
