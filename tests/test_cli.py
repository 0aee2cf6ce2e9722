"""Tests for the command line entry point."""

from pathlib import Path

import pytest

import main


class TestMain:

    def test_missing_argument_exits_non_zero(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main.main([])

        assert exc.value.code != 0

    def test_missing_directory_exits_non_zero(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main.main([str(tmp_path / "nope"), "-q", "--output-dir", str(tmp_path / "out")])

        assert exc.value.code == 1
        assert not (tmp_path / "out").exists()

    def test_scan_writes_reports(self, express_app: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"

        with pytest.raises(SystemExit) as exc:
            main.main([str(express_app), "-q", "--output-dir", str(out), "--tag", "CSCAN",
                       "-o", str(tmp_path / "scan.json")])

        assert exc.value.code == 0
        assert (out / "backend" / "query_string.txt").read_text(encoding="utf-8").startswith("name=CSCAN1")
        assert (tmp_path / "scan.json").exists()

    def test_parallel_flag(self, express_app: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"

        with pytest.raises(SystemExit) as exc:
            main.main([str(express_app), "-q", "--parallel", "--workers", "2", "--output-dir", str(out)])

        assert exc.value.code == 0
        assert (out / "backend" / "endpoints.txt").exists()


class TestLanguageLabel:

    def test_label_lists_configured_extensions(self, tmp_path: Path) -> None:
        scanner = main.RouteScanner(str(tmp_path), main.ScannerConfig(extensions={".mjs", ".cjs"}))

        assert main.language_label(scanner) == "JavaScript/TypeScript (.cjs, .mjs patterns)"


class TestRepoFolderName:

    @pytest.mark.parametrize("url, expected", [
        ("https://github.com/org/api.git", "api"),
        ("https://github.com/org/api/", "api"),
        ("git@github.com:org/payments-service.git", "payments-service"),
    ])
    def test_repo_folder_name(self, url, expected) -> None:
        assert main.repo_folder_name(url) == expected
