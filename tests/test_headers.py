"""Tests for header mapping computation."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from podrefs.headers import (
    HeaderMapping,
    MissingInputError,
    find_collisions,
    header_mappings,
    is_framework_header,
    vendored_frameworks_header_mappings,
)
from podrefs.models import SpecConsumer
from tests._fixtures.pod_builder import PodBuilder

CORE = PurePosixPath("Core")


def test_headers_are_flattened_without_mappings_dir(pod_builder: PodBuilder) -> None:
    root = pod_builder.write("Core", ["a/x.h", "b/y.h"])
    accessor = pod_builder.accessor("Core", SpecConsumer(source_files=["**/*.h"]))

    mapping = header_mappings(CORE, accessor, accessor.headers())

    assert mapping.destinations() == [CORE]
    assert mapping[CORE] == [root / "a/x.h", root / "b/y.h"]


def test_header_dir_is_appended_to_namespace(pod_builder: PodBuilder) -> None:
    root = pod_builder.write("Core", ["a/x.h"])
    accessor = pod_builder.accessor("Core", SpecConsumer(source_files=["**/*.h"], header_dir="CoreKit"))

    mapping = header_mappings(CORE, accessor, accessor.headers())

    assert mapping.to_dict() == {"Core/CoreKit": [str(root / "a/x.h")]}


def test_mappings_dir_preserves_nested_layout(pod_builder: PodBuilder) -> None:
    root = pod_builder.write("Core", ["include/sub/z.h", "include/w.h"])
    accessor = pod_builder.accessor(
        "Core", SpecConsumer(source_files=["include/**/*.h"], header_mappings_dir="include")
    )

    mapping = header_mappings(CORE, accessor, accessor.headers())

    assert mapping[CORE / "sub"] == [root / "include/sub/z.h"]
    assert mapping[CORE] == [root / "include/w.h"]


def test_mappings_dir_combines_with_header_dir(pod_builder: PodBuilder) -> None:
    pod_builder.write("Core", ["include/sub/z.h"])
    accessor = pod_builder.accessor(
        "Core",
        SpecConsumer(source_files=["include/**/*.h"], header_dir="Kit", header_mappings_dir="include"),
    )

    mapping = header_mappings(CORE, accessor, accessor.headers())

    assert mapping.destinations() == [PurePosixPath("Core/Kit/sub")]


def test_header_outside_mappings_dir_is_fatal(pod_builder: PodBuilder) -> None:
    root = pod_builder.write("Core", ["include/a.h", "src/b.h"])
    accessor = pod_builder.accessor(
        "Core", SpecConsumer(source_files=["**/*.h"], header_mappings_dir="include")
    )

    with pytest.raises(MissingInputError) as excinfo:
        header_mappings(CORE, accessor, accessor.headers())

    assert excinfo.value.header == root / "src/b.h"


def test_insertion_order_is_preserved_within_a_destination(pod_builder: PodBuilder) -> None:
    root = pod_builder.write("Core", ["b.h", "a.h"])
    accessor = pod_builder.accessor("Core")

    mapping = header_mappings(CORE, accessor, [root / "b.h", root / "a.h"])

    assert mapping[CORE] == [root / "b.h", root / "a.h"]


def test_framework_headers_are_excluded_from_ordinary_mapping(pod_builder: PodBuilder) -> None:
    root = pod_builder.write("Core", ["Sources/Core.h", "MyLib.framework/Headers/x.h"])
    accessor = pod_builder.accessor(
        "Core",
        SpecConsumer(source_files=["**/*.h"], vendored_frameworks=["MyLib.framework"]),
    )
    framework_header = root / "MyLib.framework/Headers/x.h"
    assert framework_header in accessor.headers()

    ordinary = header_mappings(CORE, accessor, accessor.headers())
    public = header_mappings(CORE, accessor, accessor.public_headers())
    frameworks = vendored_frameworks_header_mappings(CORE, accessor)

    assert framework_header not in ordinary.headers()
    assert framework_header not in public.headers()
    assert frameworks.to_dict() == {"Core/MyLib": [str(framework_header)]}


def test_framework_headers_keep_their_layout(pod_builder: PodBuilder) -> None:
    root = pod_builder.write(
        "Core",
        ["Vendor/MyLib.framework/Headers/MyLib.h", "Vendor/MyLib.framework/Headers/Private/Impl.h"],
    )
    accessor = pod_builder.accessor("Core", SpecConsumer(vendored_frameworks=["Vendor/*.framework"]))

    mapping = vendored_frameworks_header_mappings(CORE, accessor)

    headers_dir = root / "Vendor/MyLib.framework/Headers"
    assert mapping[PurePosixPath("Core/MyLib")] == [headers_dir / "MyLib.h"]
    assert mapping[PurePosixPath("Core/MyLib/Private")] == [headers_dir / "Private/Impl.h"]


def test_no_header_is_lost_or_duplicated(pod_builder: PodBuilder) -> None:
    files = ["include/a.h", "include/x/b.h", "include/x/y/c.h", "Lib.framework/Headers/d.h"]
    root = pod_builder.write("Core", files)
    accessor = pod_builder.accessor(
        "Core",
        SpecConsumer(
            source_files=["**/*.h"],
            header_mappings_dir="include",
            vendored_frameworks=["Lib.framework"],
        ),
    )

    ordinary = header_mappings(CORE, accessor, accessor.headers())
    frameworks = vendored_frameworks_header_mappings(CORE, accessor)

    ordinary_headers = ordinary.headers()
    assert len(ordinary_headers) == len(set(ordinary_headers))
    assert set(ordinary_headers) == {root / name for name in files[:3]}
    assert frameworks.headers() == [root / "Lib.framework/Headers/d.h"]


def test_is_framework_header_requires_a_framework_segment(pod_builder: PodBuilder) -> None:
    root = pod_builder.pod_root("Core")

    assert is_framework_header(root / "A.framework/Headers/a.h")
    assert not is_framework_header(root / "framework/a.h")
    assert not is_framework_header(root / "A.frameworks/a.h")


def test_find_collisions_reports_only_cross_owner_destinations() -> None:
    core = HeaderMapping()
    core.add(PurePosixPath("Shared"), PurePosixPath("/core/a.h"))  # type: ignore[arg-type]
    core.add(CORE, PurePosixPath("/core/b.h"))  # type: ignore[arg-type]
    net = HeaderMapping()
    net.add(PurePosixPath("Shared"), PurePosixPath("/net/a.h"))  # type: ignore[arg-type]

    collisions = find_collisions([("Core", core), ("Core", core), ("Net", net)])

    assert collisions == {PurePosixPath("Shared"): ["Core", "Net"]}
