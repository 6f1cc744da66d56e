"""Resolve, filter and assemble facts for a set of user queries."""

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable

from ..config import FactOptions
from ..definitions import FactDefinition, load_definitions
from ..logging import FactLogger, get_logger
from ..query import QueryParser
from ..resolvers import ResolverRegistry, default_registry
from .collection import FactCollection
from .external import ExternalFactLoader
from .filter import FactFilter
from .models import FactKind, ResolvedFact


class FactManager:
    """Entry point of the fact engine.

    Queries select the definitions to run; each selected definition runs
    once, on a worker thread, however many queries need it. Resolver caches
    live in the registry, so a long-lived manager answers repeated queries
    without probing the host again.
    """

    def __init__(
        self,
        options: FactOptions | None = None,
        registry: ResolverRegistry | None = None,
        definitions: list[FactDefinition] | None = None,
        external_loader: ExternalFactLoader | None = None,
        logger: FactLogger | None = None,
    ) -> None:
        self.options = options or FactOptions()
        self.registry = registry or default_registry(metadata_timeout=self.options.metadata_timeout)
        if definitions is None:
            definitions = load_definitions(self.registry.platform)
        self.definitions = definitions
        self.external_loader = external_loader or ExternalFactLoader(self.options.external_dirs)
        self.logger = logger or get_logger()

    def _definition_index(self) -> dict[str, FactDefinition]:
        index: dict[str, FactDefinition] = {}
        for definition in self.definitions:
            for name in definition.names:
                index.setdefault(name, definition)
        return index

    def _call_definition(
        self, definition: FactDefinition
    ) -> tuple[list[ResolvedFact], float, Exception | None]:
        start_time = time.monotonic()
        try:
            facts = definition.call_the_resolver(self.registry)
        except Exception as e:
            return [], (time.monotonic() - start_time) * 1000, e
        return facts, (time.monotonic() - start_time) * 1000, None

    async def _resolve_definitions(
        self, definitions: list[FactDefinition]
    ) -> dict[str, ResolvedFact]:
        """Run ``definitions`` concurrently and index their facts by name."""
        if not definitions:
            return {}

        loop = asyncio.get_running_loop()
        with ThreadPoolExecutor(max_workers=self.options.max_workers) as executor:
            results = await asyncio.gather(
                *(
                    loop.run_in_executor(executor, self._call_definition, definition)
                    for definition in definitions
                )
            )

        produced: dict[str, ResolvedFact] = {}
        for definition, (facts, duration_ms, error) in zip(definitions, results):
            if error is not None:
                self.logger.log_resolve_error(definition.name, error)
                facts = [ResolvedFact(definition.name, None)] + [
                    ResolvedFact(alias, None, FactKind.LEGACY) for alias in definition.aliases
                ]
            else:
                self.logger.log_resolve(definition.name, duration_ms, len(facts))

            for fact in facts:
                produced.setdefault(fact.name, fact)

        return produced

    async def resolve_facts(self, queries: Iterable[str] = ()) -> list[ResolvedFact]:
        """Resolve and filter the facts selected by ``queries``.

        With no queries every known fact is resolved. A query that matches
        no fact yields a null-valued fact named after the query.
        """
        queries = list(queries)
        external = {fact.name: fact for fact in self.external_loader.load()}
        index = self._definition_index()
        searched = QueryParser([*index, *external]).parse(queries)

        # Definitions needed by the search, each once, in first-seen order
        needed: dict[int, FactDefinition] = {}
        for searched_fact in searched:
            if searched_fact.name in external:
                continue
            definition = index.get(searched_fact.name)
            if definition is not None:
                needed.setdefault(id(definition), definition)

        produced = await self._resolve_definitions(list(needed.values()))

        resolved: list[ResolvedFact] = []
        for searched_fact in searched:
            if searched_fact.name in external:
                fact = external[searched_fact.name]
            else:
                fact = produced.get(searched_fact.name) or ResolvedFact(searched_fact.name, None)
            resolved.append(fact.with_query(searched_fact.user_query, searched_fact.filter_tokens))

        return FactFilter(self.options).filter(resolved, queries)

    async def collect(self, queries: Iterable[str] = ()) -> FactCollection:
        """Resolve ``queries`` and assemble the surviving facts into a collection."""
        facts = await self.resolve_facts(queries)
        return FactCollection(self.options, self.logger).build(facts)

    async def query_values(self, queries: Iterable[str]) -> dict[str, Any]:
        """Resolve ``queries`` and return the value each one addresses.

        Every query is answered from its own collection, so overlapping
        queries such as ``os.release.major`` and ``os.release`` do not
        collide.
        """
        queries = list(dict.fromkeys(queries))
        facts = await self.resolve_facts(queries)

        values: dict[str, Any] = {}
        for query in queries:
            matched = [fact for fact in facts if fact.user_query == query]
            values[query] = FactCollection(self.options, self.logger).build(matched).value(query)
        return values
