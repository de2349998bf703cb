# tests/5_core/test_run_build.py

import argparse
from pathlib import Path

import pytest

import srdn.build as mod_build
import srdn.config as mod_config
import srdn.errors as mod_errors
import srdn.targets as mod_targets
from tests.utils import FakeResolver, write_css


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    write_css(tmp_path / "src" / "a.css", ".a { color: red }")
    write_css(tmp_path / "src" / "b.css", ".b { color: blue }")
    return tmp_path


class RecordingEngine(mod_build.CssEngine):
    def __init__(self) -> None:
        self.parsed: list[str] = []

    def parse(self, filename, code, options):  # type: ignore[no-untyped-def]
        self.parsed.append(filename)
        return super().parse(filename, code, options)


def test_request_from_args() -> None:
    # --- setup ---
    args = argparse.Namespace(
        file="src/a.css", output_file="out.css", dir=None, output_dir="dist"
    )

    # --- execute ---
    request = mod_build.BuildRequest.from_args(args)

    # --- verify ---
    assert request.file == Path("src/a.css")
    assert request.output_file == Path("out.css")
    assert request.source_dir is None
    assert request.single_file
    assert not request.directory


def test_single_file_runs_before_directory(project: Path) -> None:
    # --- setup ---
    request = mod_build.BuildRequest(
        file=Path("src/b.css"),
        output_file=Path("single.css"),
        source_dir=Path("src"),
        output_dir=Path("dist"),
    )
    engine = RecordingEngine()

    # --- execute ---
    results = mod_build.run_build(
        request, mod_config.ProjectSettings(), engine=engine
    )

    # --- verify ---
    assert engine.parsed == ["src/b.css", "src/a.css", "src/b.css"]
    assert all(r.ok for r in results)
    assert (project / "single.css").is_file()
    assert (project / "dist" / "src" / "a.css").is_file()


def test_incomplete_modes_build_nothing(project: Path) -> None:
    # --- setup ---
    request = mod_build.BuildRequest(file=Path("src/a.css"), output_dir=Path("dist"))

    # --- execute ---
    results = mod_build.run_build(request, mod_config.ProjectSettings())

    # --- verify ---
    assert results == []
    assert not (project / "dist").exists()


def test_incomplete_modes_skip_target_resolution(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    # --- setup ---
    resolver = FakeResolver(error=AssertionError("must not be called"))
    settings = mod_config.ProjectSettings(browserslist=("last 2 versions",))
    request = mod_build.BuildRequest(output_file=Path("out.css"), source_dir=Path("src"))

    # --- execute ---
    results = mod_build.run_build(request, settings, resolver=resolver)

    # --- verify ---
    assert results == []
    assert resolver.calls == []
    err = capsys.readouterr().err
    assert "Single-file mode needs both" in err
    assert "Directory mode needs both" in err
    assert not (project / "out.css").exists()


def test_targets_are_resolved_once(
    project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    # --- setup ---
    resolver = FakeResolver([("chrome", "120"), ("firefox", "115.0")])
    settings = mod_config.ProjectSettings(browserslist=("last 2 versions",))
    seen: list[mod_targets.Browsers | None] = []
    real_build_css = mod_build.build_css

    def spy(*args, **kwargs):  # type: ignore[no-untyped-def]
        seen.append(kwargs["targets"])
        return real_build_css(*args, **kwargs)

    monkeypatch.setattr(mod_build, "build_css", spy)

    # --- execute ---
    mod_build.run_build(
        mod_build.BuildRequest(source_dir=Path("src"), output_dir=Path("dist")),
        settings,
        resolver=resolver,
    )

    # --- verify ---
    assert resolver.calls == [["last 2 versions"]]
    expected = mod_targets.Browsers(chrome=120 << 16, firefox=115 << 16)
    assert seen == [expected, expected]
    assert (project / "dist" / "src" / "b.css").is_file()


def test_target_failure_aborts_before_building(project: Path) -> None:
    # --- setup ---
    resolver = FakeResolver(error=RuntimeError("unknown browser query"))
    settings = mod_config.ProjectSettings(browserslist=("nonsense",))

    # --- execute ---
    with pytest.raises(mod_errors.TargetResolutionError):
        mod_build.run_build(
            mod_build.BuildRequest(source_dir=Path("src"), output_dir=Path("dist")),
            settings,
            resolver=resolver,
        )

    # --- verify ---
    assert not (project / "dist").exists()


def test_no_browserslist_skips_the_resolver(project: Path) -> None:
    # --- setup ---
    resolver = FakeResolver(error=AssertionError("must not be called"))

    # --- execute ---
    results = mod_build.run_build(
        mod_build.BuildRequest(file=Path("src/a.css"), output_file=Path("a.min.css")),
        mod_config.ProjectSettings(),
        resolver=resolver,
    )

    # --- verify ---
    assert resolver.calls == []
    assert [r.ok for r in results] == [True]
    assert (project / "a.min.css").is_file()
