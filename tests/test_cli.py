"""Tests for the CLI."""

import json
import os
from pathlib import Path

import pytest

from hostfacts.cli import build_options, create_parser, format_value, render, render_values, run
from hostfacts.definitions import FactDefinition
from hostfacts.facts import ExternalFactLoader, FactCollection, FactKind, ResolvedFact
from hostfacts.facts.manager import FactManager
from hostfacts.logging import FactLogger
from hostfacts.resolvers import ResolverRegistry


@pytest.fixture
def collection(tmp_path: Path) -> FactCollection:
    return FactCollection(logger=FactLogger(tmp_path)).build(
        [
            ResolvedFact("os.release", {"full": "12", "major": "12"}),
            ResolvedFact("kernel", "Linux"),
            ResolvedFact("memoryfree_mb", 512.5, FactKind.LEGACY),
        ]
    )


class FakeManager:
    def __init__(self, collection: FactCollection) -> None:
        self.collection = collection
        self.queries = None

    async def collect(self, queries=()):
        self.queries = list(queries)
        return self.collection

    async def query_values(self, queries):
        self.queries = list(queries)
        return {query: self.collection.value(query) for query in self.queries}


class TestFormatValue:
    def test_scalars(self):
        assert format_value("Linux") == "Linux"
        assert format_value(12) == "12"
        assert format_value(True) == "true"
        assert format_value(None) == ""

    def test_structures(self):
        assert json.loads(format_value({"b": 1, "a": [1, 2]})) == {"a": [1, 2], "b": 1}


class TestRender:
    def test_everything_as_text(self, collection: FactCollection):
        lines = render(collection).splitlines()
        assert lines[0] == "kernel => Linux"
        assert lines[1] == "memoryfree_mb => 512.5"
        assert lines[2].startswith("os => {")

    def test_everything_as_json(self, collection: FactCollection):
        assert json.loads(render(collection, as_json=True)) == collection

    def test_single_query(self):
        assert render_values({"os.release.major": "12"}) == "12"

    def test_several_queries(self):
        output = render_values({"kernel": "Linux", "os.release.full": "12", "nope": None})
        assert output.splitlines() == ["kernel => Linux", "os.release.full => 12", "nope => "]

    def test_queries_as_json(self):
        output = render_values({"kernel": "Linux", "nope": None}, as_json=True)
        assert json.loads(output) == {"kernel": "Linux", "nope": None}


class TestBuildOptions:
    def test_flags_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("HOSTFACTS_SHOW_LEGACY", raising=False)
        monkeypatch.delenv("HOSTFACTS_EXTERNAL_DIRS", raising=False)
        monkeypatch.delenv("HOSTFACTS_LOG_DIR", raising=False)
        args = create_parser().parse_args(
            [
                "--show-legacy",
                "--config", str(tmp_path / "missing.json"),
                "--external-dir", str(tmp_path / "a"),
                "--external-dir", str(tmp_path / "b"),
                "--log-dir", str(tmp_path / "logs"),
                "os",
            ]
        )

        options = build_options(args)

        assert args.queries == ["os"]
        assert options.show_legacy is True
        assert options.external_dirs == [tmp_path / "a", tmp_path / "b"]
        assert options.log_dir == tmp_path / "logs"

    def test_env_applies(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HOSTFACTS_STRUCTURED_EXTERNAL_FACTS", "on")
        args = create_parser().parse_args(["--config", str(tmp_path / "missing.json")])
        assert build_options(args).structured_external_facts is True


@pytest.mark.asyncio
async def test_run_prints_query(collection: FactCollection, capsys: pytest.CaptureFixture):
    manager = FakeManager(collection)
    args = create_parser().parse_args(["os.release.major"])

    exit_code = await run(args, manager=manager)

    assert exit_code == 0
    assert manager.queries == ["os.release.major"]
    assert capsys.readouterr().out.strip() == "12"


@pytest.mark.asyncio
async def test_run_strict_missing_fact(collection: FactCollection, capsys: pytest.CaptureFixture):
    args = create_parser().parse_args(["--strict", "kernel", "nope"])
    assert await run(args, manager=FakeManager(collection)) == 1


@pytest.mark.asyncio
async def test_run_strict_all_present(collection: FactCollection, capsys: pytest.CaptureFixture):
    args = create_parser().parse_args(["--strict", "kernel"])
    assert await run(args, manager=FakeManager(collection)) == 0


class StaticRelease(FactDefinition):
    @property
    def name(self) -> str:
        return "os.release"

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, {"full": "12.4", "major": "12", "minor": "4"})]


@pytest.mark.asyncio
async def test_run_overlapping_queries(tmp_path: Path, capsys: pytest.CaptureFixture):
    manager = FactManager(
        registry=ResolverRegistry("linux"),
        definitions=[StaticRelease()],
        external_loader=ExternalFactLoader(),
        logger=FactLogger(tmp_path),
    )
    args = create_parser().parse_args(["--json", "os.release.major", "os.release"])

    assert await run(args, manager=manager) == 0
    assert json.loads(capsys.readouterr().out) == {
        "os.release.major": "12",
        "os.release": {"full": "12.4", "major": "12", "minor": "4"},
    }


def test_main_loads_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    from hostfacts import main as main_module

    (tmp_path / ".env").write_text("HOSTFACTS_TEST_MARKER=from-dotenv\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.argv", ["hostfacts", "kernel"])
    seen = {}

    def fake_run_cli(argv):
        seen["argv"] = argv
        seen["marker"] = os.environ.get("HOSTFACTS_TEST_MARKER")
        return 0

    monkeypatch.setattr(main_module, "run_cli", fake_run_cli)
    try:
        with pytest.raises(SystemExit) as exc_info:
            main_module.main()
    finally:
        os.environ.pop("HOSTFACTS_TEST_MARKER", None)

    assert exc_info.value.code == 0
    assert seen == {"argv": ["kernel"], "marker": "from-dotenv"}
