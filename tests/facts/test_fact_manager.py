"""Tests for the fact manager."""

import json
from pathlib import Path

import pytest

from hostfacts.config import FactOptions
from hostfacts.definitions import FactDefinition
from hostfacts.facts import ExternalFactLoader, FactKind, ResolvedFact
from hostfacts.facts.manager import FactManager
from hostfacts.logging import FactLogger
from hostfacts.resolvers import Resolver, ResolverRegistry


class CountingResolver(Resolver):
    """Resolver that records how often its operation runs."""

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    @property
    def name(self) -> str:
        return "fake"

    def _post_resolve(self, key: str) -> None:
        self.calls += 1
        self._fact_list.update(
            release={"full": "18.7.0", "major": "18", "minor": 7, "arry": ["val", {"val2": "val3"}]},
            os_name="Darwin",
        )


class FakeOsRelease(FactDefinition):
    def __init__(self) -> None:
        self.calls = 0

    @property
    def name(self) -> str:
        return "os.release"

    @property
    def aliases(self) -> list[str]:
        return ["operatingsystemrelease"]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        self.calls += 1
        release = registry.resolve("fake", "release")
        return [
            ResolvedFact(self.name, release),
            ResolvedFact("operatingsystemrelease", release["full"], FactKind.LEGACY),
        ]


class FakeOsName(FactDefinition):
    @property
    def name(self) -> str:
        return "os.name"

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        return [ResolvedFact(self.name, registry.resolve("fake", "os_name"))]


class BrokenDefinition(FactDefinition):
    @property
    def name(self) -> str:
        return "broken.fact"

    @property
    def aliases(self) -> list[str]:
        return ["brokenfact"]

    def call_the_resolver(self, registry: ResolverRegistry) -> list[ResolvedFact]:
        raise RuntimeError("probe exploded")


@pytest.fixture
def logger(tmp_path: Path) -> FactLogger:
    return FactLogger(log_dir=tmp_path / "logs")


@pytest.fixture
def resolver() -> CountingResolver:
    return CountingResolver()


@pytest.fixture
def os_release() -> FakeOsRelease:
    return FakeOsRelease()


def make_manager(
    resolver: CountingResolver,
    os_release: FakeOsRelease,
    logger: FactLogger,
    external_dir: Path | None = None,
    **options,
) -> FactManager:
    registry = ResolverRegistry("darwin")
    registry.register(resolver)
    return FactManager(
        FactOptions(**options),
        registry=registry,
        definitions=[os_release, FakeOsName(), BrokenDefinition()],
        external_loader=ExternalFactLoader([external_dir] if external_dir else []),
        logger=logger,
    )


@pytest.fixture
def manager(resolver, os_release, logger) -> FactManager:
    return make_manager(resolver, os_release, logger)


def read_log(logger: FactLogger) -> list[dict]:
    with open(logger.log_path) as f:
        return [json.loads(line) for line in f]


@pytest.mark.asyncio
async def test_collect_everything(manager: FactManager):
    collection = await manager.collect()
    assert collection == {
        "os": {
            "release": {"full": "18.7.0", "major": "18", "minor": 7, "arry": ["val", {"val2": "val3"}]},
            "name": "Darwin",
        }
    }


@pytest.mark.asyncio
async def test_collect_with_show_legacy(resolver, os_release, logger):
    manager = make_manager(resolver, os_release, logger, show_legacy=True)
    collection = await manager.collect()
    assert collection["operatingsystemrelease"] == "18.7.0"


@pytest.mark.asyncio
async def test_failing_definition_is_logged_and_absent(manager: FactManager, logger: FactLogger):
    collection = await manager.collect()

    assert "broken" not in collection
    errors = [e for e in read_log(logger) if e["level"] == "error"]
    assert len(errors) == 1
    assert errors[0]["event"] == "fact_resolve_failed"
    assert errors[0]["fact_name"] == "broken.fact"
    assert "probe exploded" in errors[0]["error"]


@pytest.mark.asyncio
async def test_query_narrows_value(manager: FactManager):
    collection = await manager.collect(["os.release.major"])
    assert collection == {"os": {"release": {"major": "18"}}}
    assert collection.value("os.release.major") == "18"


@pytest.mark.asyncio
async def test_query_with_array_index(manager: FactManager):
    collection = await manager.collect(["os.release.arry.1.val2"])
    assert collection.value("os.release.arry.1.val2") == "val3"


@pytest.mark.asyncio
async def test_group_query(manager: FactManager):
    collection = await manager.collect(["os"])
    assert set(collection["os"]) == {"release", "name"}


@pytest.mark.asyncio
async def test_explicit_legacy_query(manager: FactManager):
    collection = await manager.collect(["operatingsystemrelease"])
    assert collection == {"operatingsystemrelease": "18.7.0"}


@pytest.mark.asyncio
async def test_unknown_query(manager: FactManager):
    facts = await manager.resolve_facts(["nope.nothing"])
    assert facts == [ResolvedFact("nope.nothing", None, user_query="nope.nothing")]

    collection = await manager.collect(["nope.nothing"])
    assert collection == {}


@pytest.mark.asyncio
async def test_missing_path_drops_fact(manager: FactManager):
    collection = await manager.collect(["os.release.nope"])
    assert collection == {}


@pytest.mark.asyncio
async def test_definition_runs_once_for_many_queries(
    manager: FactManager, resolver: CountingResolver, os_release: FakeOsRelease
):
    collection = await manager.collect(
        ["os.release.full", "os.release.major", "operatingsystemrelease"]
    )

    assert collection == {
        "os": {"release": {"full": "18.7.0", "major": "18"}},
        "operatingsystemrelease": "18.7.0",
    }
    assert os_release.calls == 1
    assert resolver.calls == 1


@pytest.mark.asyncio
async def test_resolver_cache_survives_collections(
    manager: FactManager, resolver: CountingResolver, os_release: FakeOsRelease
):
    await manager.collect(["os.release"])
    await manager.collect(["os.name"])
    await manager.collect()

    assert os_release.calls == 2
    assert resolver.calls == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "queries",
    [
        ["os.release.major", "os.release"],
        ["os.release", "os.release.major"],
    ],
)
async def test_overlapping_queries_keep_full_values(
    manager: FactManager, logger: FactLogger, queries: list[str]
):
    values = await manager.query_values(queries)

    assert values == {
        "os.release.major": "18",
        "os.release": {"full": "18.7.0", "major": "18", "minor": 7, "arry": ["val", {"val2": "val3"}]},
    }
    assert [e for e in read_log(logger) if e["event"] == "fact_conflict"] == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "queries",
    [
        ["os.release.major", "os"],
        ["os", "os.release.major"],
    ],
)
async def test_group_query_beside_narrowed_query(manager: FactManager, queries: list[str]):
    values = await manager.query_values(queries)

    assert values["os"]["name"] == "Darwin"
    assert values["os"]["release"]["full"] == "18.7.0"
    assert values["os.release.major"] == "18"


@pytest.mark.asyncio
async def test_query_values_misses_and_legacy(manager: FactManager):
    values = await manager.query_values(
        ["operatingsystemrelease", "os.release.nope", "nope", "operatingsystemrelease"]
    )

    assert values == {
        "operatingsystemrelease": "18.7.0",
        "os.release.nope": None,
        "nope": None,
    }

@pytest.mark.asyncio
async def test_external_facts(resolver, os_release, logger, tmp_path: Path):
    external_dir = tmp_path / "facts.d"
    external_dir.mkdir()
    (external_dir / "site.json").write_text(
        json.dumps({"site.location": {"dc": "ams1"}, "role": "web"})
    )

    manager = make_manager(
        resolver, os_release, logger, external_dir, structured_external_facts=True
    )

    collection = await manager.collect(["site.location.dc", "role"])
    assert collection == {"site": {"location": {"dc": "ams1"}}, "role": "web"}


@pytest.mark.asyncio
async def test_external_facts_stay_flat_by_default(resolver, os_release, logger, tmp_path: Path):
    external_dir = tmp_path / "facts.d"
    external_dir.mkdir()
    (external_dir / "site.txt").write_text("site.location=ams1\n")

    manager = make_manager(resolver, os_release, logger, external_dir)

    collection = await manager.collect()
    assert collection["site.location"] == "ams1"
