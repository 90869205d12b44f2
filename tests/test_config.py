"""Tests for podrefs.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from podrefs.config import ConfigError, PodrefsConfig, SpecConfig, TargetConfig, load_config


def _write_manifest(root: Path, text: str) -> Path:
    path = root / ".podrefs.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    _write_manifest(
        tmp_path,
        """
sandbox: "Build/Pods"
targets:
  - name: Core-iOS
    platform: ios
    deployment_target: "12.0"
    specs:
      - name: Core/UI
        header_dir: CoreUI
        header_mappings_dir: include
        source_files: ["UI/**/*.{h,m}"]
        exclude_files: UI/Tests
        private_header_files:
          - "UI/**/*+Private.h"
        resources: ["Assets/*.png"]
        resource_bundles:
          CoreAssets: ["Bundle/*.json"]
        vendored_frameworks: ["Vendor/*.framework"]
        vendored_libraries: ["Vendor/*.a"]
      - name: LocalKit
        path: ../LocalKit
        local: true
        source_files: ["Sources/**/*.swift"]
""",
    )

    config = load_config(tmp_path)

    assert isinstance(config, PodrefsConfig)
    assert config.root == tmp_path.resolve()
    assert config.sandbox == tmp_path.resolve() / "Build" / "Pods"

    target = config.targets[0]
    assert isinstance(target, TargetConfig)
    assert target.name == "Core-iOS"
    assert target.platform == "ios"
    assert target.deployment_target == "12.0"

    core, local = target.specs
    assert isinstance(core, SpecConfig)
    assert core.name == "Core/UI"
    assert core.root == config.sandbox / "Core"
    assert core.local is False
    assert core.header_dir == "CoreUI"
    assert core.header_mappings_dir == "include"
    assert core.source_files == ["UI/**/*.{h,m}"]
    assert core.exclude_files == ["UI/Tests"]
    assert core.private_header_files == ["UI/**/*+Private.h"]
    assert core.resource_bundles == {"CoreAssets": ["Bundle/*.json"]}
    assert core.vendored_frameworks == ["Vendor/*.framework"]
    assert core.vendored_libraries == ["Vendor/*.a"]

    assert local.local is True
    assert local.root == (tmp_path / ".." / "LocalKit").resolve()


def test_load_config_defaults_for_empty_manifest(tmp_path: Path) -> None:
    manifest = _write_manifest(tmp_path, "")

    config = load_config(manifest)

    assert config.sandbox == tmp_path.resolve() / "Pods"
    assert config.targets == []


def test_load_config_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "text, message",
    [
        ("- just\n- a list\n", "mapping at the root"),
        ("targets: nope\n", "'targets' must be a list"),
        ("targets:\n  - platform: ios\n", "missing 'name'"),
        ("targets:\n  - name: Core-iOS\n", "missing 'platform'"),
        ("targets:\n  - name: A\n    platform: ios\n    specs:\n      - path: x\n", "spec is missing 'name'"),
        ("targets: [unterminated\n", "Failed to parse"),
    ],
)
def test_load_config_rejects_malformed_manifests(tmp_path: Path, text: str, message: str) -> None:
    _write_manifest(tmp_path, text)

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)

    assert message in str(excinfo.value)
