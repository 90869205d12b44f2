"""Pod file references installer: project groups and header search paths."""

from .builder import Installation, build_installation
from .config import ConfigError, PodrefsConfig, load_config
from .file_accessor import FileAccessor, FileCategory
from .groups import GroupCategory, GroupClassifier
from .headers import HeaderMapping, MissingInputError, header_mappings, vendored_frameworks_header_mappings
from .headers_store import HeadersStore
from .installer import CollisionWarning, FileReferencesInstaller, InstallReport
from .models import Platform, PodTarget, SpecConsumer, Specification
from .path_list import PathList
from .project import Group, Project, ProjectModelError
from .sandbox import Sandbox

__all__ = [
    "CollisionWarning",
    "ConfigError",
    "FileAccessor",
    "FileCategory",
    "FileReferencesInstaller",
    "Group",
    "GroupCategory",
    "GroupClassifier",
    "HeaderMapping",
    "HeadersStore",
    "InstallReport",
    "Installation",
    "MissingInputError",
    "PathList",
    "Platform",
    "PodTarget",
    "PodrefsConfig",
    "Project",
    "ProjectModelError",
    "Sandbox",
    "SpecConsumer",
    "Specification",
    "build_installation",
    "header_mappings",
    "load_config",
    "vendored_frameworks_header_mappings",
]
