"""Installs the file references and header links of the pods in the project."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, List, Sequence, Tuple

from .file_accessor import FileAccessor, FileCategory
from .groups import GroupCategory, GroupClassifier
from .headers import (
    HeaderMapping,
    find_collisions,
    header_mappings,
    vendored_frameworks_header_mappings,
)
from .headers_store import HeadersStore
from .logging import get_logger
from .models import Platform, PodTarget
from .project import Project
from .sandbox import Sandbox

# (file category, group category, whether local pods may mirror their folders)
_SOURCE_FILES = ((FileCategory.SOURCE_FILES, GroupCategory.DEFAULT, True),)
_FRAMEWORK_BUNDLES = ((FileCategory.VENDORED_FRAMEWORKS, GroupCategory.FRAMEWORKS, False),)
_VENDORED_LIBRARIES = ((FileCategory.VENDORED_LIBRARIES, GroupCategory.FRAMEWORKS, False),)
_RESOURCES = (
    (FileCategory.RESOURCES, GroupCategory.RESOURCES, True),
    (FileCategory.RESOURCE_BUNDLE_FILES, GroupCategory.RESOURCES, True),
)


@dataclass(frozen=True)
class CollisionWarning:
    """Headers of different pods linked into the same destination directory."""

    visibility: str
    platform: str
    destination: PurePosixPath
    pods: Tuple[str, ...]

    def __str__(self) -> str:
        pods = ", ".join(self.pods)
        return f"{self.visibility} headers of {pods} share {self.destination} ({self.platform})"


@dataclass
class _AccessorHeaders:
    """Header mappings computed for one file accessor of a target."""

    target: PodTarget
    file_accessor: FileAccessor
    headers_sandbox: PurePosixPath
    build: HeaderMapping
    public: HeaderMapping
    frameworks: HeaderMapping


@dataclass
class InstallReport:
    """Summary of an installation run."""

    file_references: int = 0
    build_headers: int = 0
    public_headers: int = 0
    collisions: List[CollisionWarning] = field(default_factory=list)


class FileReferencesInstaller:
    """Adds the files of every pod target to the project and links their headers."""

    def __init__(
        self,
        sandbox: Sandbox,
        pod_targets: Sequence[PodTarget],
        project: Project,
        *,
        max_workers: int = 1,
    ) -> None:
        self.sandbox = sandbox
        self.pod_targets = list(pod_targets)
        self.project = project
        self.classifier = GroupClassifier(project, sandbox)
        self.max_workers = max(1, max_workers)
        self.logger = get_logger("installer")

    def install(self) -> InstallReport:
        """Run every installation step in order.

        Nothing is rolled back when a step fails; the caller must discard
        the project and header stores in that case.
        """
        report = InstallReport()
        file_accessors = self._file_accessors()
        self.logger.debug("Installing %d file accessor(s)", len(file_accessors))

        self._refresh_file_accessors(file_accessors)

        self.logger.info("- Adding source files to Pods project")
        report.file_references += self._add_paths_to_pods_group(file_accessors, _SOURCE_FILES)

        self.logger.info("- Adding frameworks to Pods project")
        report.file_references += self._add_paths_to_pods_group(file_accessors, _FRAMEWORK_BUNDLES)

        self.logger.info("- Adding libraries to Pods project")
        report.file_references += self._add_paths_to_pods_group(file_accessors, _VENDORED_LIBRARIES)

        self.logger.info("- Adding resources to Pods project")
        report.file_references += self._add_paths_to_pods_group(file_accessors, _RESOURCES)

        self.logger.info("- Linking headers")
        self._link_headers(report)
        return report

    def _file_accessors(self) -> List[FileAccessor]:
        return [
            file_accessor
            for pod_target in self.pod_targets
            for file_accessor in pod_target.file_accessors
            if file_accessor is not None
        ]

    @staticmethod
    def _refresh_file_accessors(file_accessors: Sequence[FileAccessor]) -> None:
        # Accessors of sibling subspecs share a path list; read each one once.
        refreshed = set()
        for file_accessor in file_accessors:
            path_list = file_accessor.path_list
            if id(path_list) in refreshed:
                continue
            path_list.read_file_system()
            refreshed.add(id(path_list))

    def _add_paths_to_pods_group(
        self,
        file_accessors: Sequence[FileAccessor],
        categories: Sequence[Tuple[FileCategory, GroupCategory, bool]],
    ) -> int:
        count = 0
        for file_category, group_category, reflect_allowed in categories:
            for file_accessor in file_accessors:
                spec_name = file_accessor.spec.name
                reflect = reflect_allowed and self.sandbox.local(spec_name)
                paths = file_category.paths(file_accessor)
                if not paths:
                    continue
                group = self.classifier.group_for(spec_name, group_category)
                for path in paths:
                    if self.project.reference_for_path(path) is None:
                        count += 1
                    self.classifier.add_file_reference(path, group, reflect)
                self.logger.debug(
                    "Referenced %d %s of %s in %s", len(paths), file_category.label, spec_name, group.hierarchy_path
                )
        return count

    def _link_headers(self, report: InstallReport) -> None:
        jobs = [
            (pod_target, file_accessor)
            for pod_target in self.pod_targets
            for file_accessor in pod_target.file_accessors
            if file_accessor is not None
        ]
        if self.max_workers > 1 and len(jobs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                computed = list(executor.map(lambda job: _compute_headers(*job), jobs))
        else:
            computed = [_compute_headers(pod_target, file_accessor) for pod_target, file_accessor in jobs]

        # Publishing happens here only, in target order.
        for entry in computed:
            platform = entry.target.platform
            build_store = entry.target.build_headers
            public_store = self.sandbox.public_headers

            build_store.add_search_path(entry.headers_sandbox, platform)
            public_store.add_search_path(entry.headers_sandbox, platform)

            report.build_headers += _publish(build_store, entry.build, platform)
            report.public_headers += _publish(public_store, entry.public, platform)
            report.public_headers += _publish(public_store, entry.frameworks, platform)

        report.collisions.extend(self._detect_collisions(computed))
        for collision in report.collisions:
            self.logger.warning("Header collision: %s", collision)

    def _detect_collisions(self, computed: Sequence[_AccessorHeaders]) -> List[CollisionWarning]:
        """Find destinations that receive headers from more than one pod."""
        owners: Dict[Tuple[int, str], List[Tuple[str, HeaderMapping]]] = {}
        stores: Dict[int, HeadersStore] = {}
        public_store = self.sandbox.public_headers
        for entry in computed:
            pod_name = entry.file_accessor.spec.root_name
            platform = entry.target.platform.name
            build_store = entry.target.build_headers
            stores[id(build_store)] = build_store
            stores[id(public_store)] = public_store
            owners.setdefault((id(build_store), platform), []).append((pod_name, entry.build))
            public_owners = owners.setdefault((id(public_store), platform), [])
            public_owners.append((pod_name, entry.public))
            public_owners.append((pod_name, entry.frameworks))

        collisions: List[CollisionWarning] = []
        for (store_id, platform), mappings in owners.items():
            for destination, pods in find_collisions(mappings).items():
                collisions.append(
                    CollisionWarning(
                        visibility=stores[store_id].visibility,
                        platform=platform,
                        destination=destination,
                        pods=tuple(pods),
                    )
                )
        return collisions


def _compute_headers(pod_target: PodTarget, file_accessor: FileAccessor) -> _AccessorHeaders:
    headers_sandbox = PurePosixPath(file_accessor.spec.root_name)
    return _AccessorHeaders(
        target=pod_target,
        file_accessor=file_accessor,
        headers_sandbox=headers_sandbox,
        build=header_mappings(headers_sandbox, file_accessor, FileCategory.HEADERS.paths(file_accessor)),
        public=header_mappings(headers_sandbox, file_accessor, FileCategory.PUBLIC_HEADERS.paths(file_accessor)),
        frameworks=vendored_frameworks_header_mappings(headers_sandbox, file_accessor),
    )


def _publish(store: HeadersStore, mapping: HeaderMapping, platform: Platform) -> int:
    count = 0
    for namespace, files in mapping.items():
        count += len(store.add_files(namespace, files, platform))
    return count


__all__ = ["CollisionWarning", "FileReferencesInstaller", "InstallReport"]
