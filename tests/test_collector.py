"""Tests for SourceCollector file selection."""

from pathlib import Path

from route_scanner import SourceCollector


def _relative(paths, root: Path):
    return [p.relative_to(root).as_posix() for p in paths]


class TestSourceCollector:

    def test_default_selection(self, express_app: Path) -> None:
        collector = SourceCollector()

        files = collector.collect(express_app)

        assert _relative(files, express_app) == ["app.js", "routes/users.js"]
        assert collector.stats["test_files_skipped"] == 1
        assert collector.stats["files_skipped"] == 1  # README.md

    def test_include_tests(self, express_app: Path) -> None:
        files = SourceCollector(include_tests=True).collect(express_app)

        assert _relative(files, express_app) == ["app.js", "routes/users.js", "routes/users.test.js"]

    def test_ignored_directories_are_not_descended(self, express_app: Path) -> None:
        files = SourceCollector(ignore_dirs=set()).collect(express_app)

        assert "node_modules/lib/index.js" in _relative(files, express_app)

    def test_spec_files_and_typescript(self, tmp_path: Path) -> None:
        for name in ("api.ts", "api.spec.ts", "b.test.js", "c.tsx", "d.mjs", "spec.js", "contest.js"):
            (tmp_path / name).write_text("", encoding="utf-8")

        files = SourceCollector().collect(tmp_path)

        assert _relative(files, tmp_path) == ["api.ts", "contest.js", "spec.js"]

    def test_custom_extensions(self, tmp_path: Path) -> None:
        (tmp_path / "a.mjs").write_text("", encoding="utf-8")
        (tmp_path / "a.test.mjs").write_text("", encoding="utf-8")

        files = SourceCollector(extensions={".mjs"}).collect(tmp_path)

        assert _relative(files, tmp_path) == ["a.mjs"]

    def test_sorted_walk_order(self, tmp_path: Path) -> None:
        (tmp_path / "b").mkdir()
        (tmp_path / "a").mkdir()
        (tmp_path / "b" / "x.js").write_text("", encoding="utf-8")
        (tmp_path / "a" / "y.js").write_text("", encoding="utf-8")
        (tmp_path / "z.js").write_text("", encoding="utf-8")

        files = SourceCollector().collect(tmp_path)

        assert _relative(files, tmp_path) == ["a/y.js", "b/x.js", "z.js"]

    def test_directory_visited_where_it_sorts(self, tmp_path: Path) -> None:
        (tmp_path / "m").mkdir()
        (tmp_path / "m" / "y.js").write_text("", encoding="utf-8")
        (tmp_path / "a.js").write_text("", encoding="utf-8")
        (tmp_path / "z.js").write_text("", encoding="utf-8")

        files = SourceCollector().collect(tmp_path)

        assert _relative(files, tmp_path) == ["a.js", "m/y.js", "z.js"]

    def test_stats_reset_per_collect(self, express_app: Path) -> None:
        collector = SourceCollector()

        collector.collect(express_app)
        collector.collect(express_app)

        assert collector.stats == {"files_collected": 2, "files_skipped": 1, "test_files_skipped": 1}
