"""CLI behaviour tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from podrefs.cli import _build_parser, main
from tests._fixtures.pod_builder import PodBuilder


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    logger = logging.getLogger("podrefs")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def _manifest(tmp_path: Path, extra: str = "") -> Path:
    builder = PodBuilder(tmp_path)
    builder.write("Core", ["Sources/Core.h", "Sources/Core.m", "include/a.h"])
    manifest = tmp_path / ".podrefs.yml"
    manifest.write_text(
        "sandbox: Pods\n"
        "targets:\n"
        "  - name: Core-iOS\n"
        "    platform: ios\n"
        "    specs:\n"
        "      - name: Core\n"
        "        source_files: ['Sources/*', 'include/*.h']\n" + extra,
        encoding="utf-8",
    )
    return manifest


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "install"])
    assert args.verbose is True
    assert args.command == "install"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["install", "--verbose", "--json", "--workers", "3", "Podfile.yml"])
    assert args.verbose is True
    assert args.json is True
    assert args.workers == 3
    assert args.path == "Podfile.yml"


def test_install_prints_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _manifest(tmp_path)

    main(["install", str(tmp_path)])

    out = capsys.readouterr().out
    assert "Installed 3 file reference(s), 2 build header link(s), 2 public header link(s)" in out


def test_install_prints_json_layout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    manifest = _manifest(tmp_path)

    main(["install", "--json", str(manifest)])

    layout = json.loads(capsys.readouterr().out)
    assert layout["file_references"] == 3
    assert list(layout["headers"]["public"]["ios"]["headers"]) == ["Core"]


def test_install_reports_missing_manifest(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["install", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Manifest not found" in capsys.readouterr().err


def test_install_reports_misdeclared_mappings_dir(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _manifest(tmp_path, "        header_mappings_dir: include\n")

    with pytest.raises(SystemExit) as excinfo:
        main(["install", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "podrefs install failed" in capsys.readouterr().err


def test_install_writes_log_file(tmp_path: Path) -> None:
    _manifest(tmp_path)
    log_file = tmp_path / "install.log"

    main(["install", "--verbose", "--log-file", str(log_file), str(tmp_path)])

    text = log_file.read_text(encoding="utf-8")
    assert "INFO podrefs.installer: - Adding source files to Pods project" in text
    assert "DEBUG podrefs.installer: Referenced 3 source_files of Core in /Pods/Core" in text
