"""Tests for the remote-store-with-local-fallback collections."""
import asyncio
import logging
from portal.database import AsyncSessionLocal
from portal.stores import TICKETS, DEPLOYMENTS, FallbackCollection, LocalCache
from fakes import FailingDocumentStore, InMemoryDocumentStore

DOC = {"id": "MAS-001", "title": "Local feature", "status": "Abierto", "requestingUserId": "client-tla1"}
OTHER = {"id": "MAS-002", "title": "Bug", "status": "Resuelto", "requestingUserId": "client-fema1"}


def collection(db, remote=None, spec=TICKETS) -> FallbackCollection:
    return FallbackCollection(spec, LocalCache(db), remote)


class TestLocalOnly:
    """No document store configured."""

    async def test_put_then_get(self, db):
        tickets = collection(db)
        assert await tickets.put(DOC) == DOC
        assert await tickets.get("MAS-001") == DOC
        assert await tickets.list() == [DOC]

    async def test_put_replaces_existing(self, db):
        tickets = collection(db)
        await tickets.put(DOC)
        await tickets.put({**DOC, "status": "Cerrado"})
        records = await tickets.list()
        assert len(records) == 1
        assert records[0]["status"] == "Cerrado"

    async def test_list_filters(self, db):
        tickets = collection(db)
        await tickets.put(DOC)
        await tickets.put(OTHER)
        assert await tickets.list({"requestingUserId": "client-fema1"}) == [OTHER]

    async def test_get_missing(self, db):
        assert await collection(db).get("MAS-999") is None
        assert await collection(db).get("") is None

    async def test_collections_are_separate(self, db):
        await collection(db).put(DOC)
        assert await collection(db, spec=DEPLOYMENTS).list() == []


class TestRemoteAvailable:

    async def test_put_writes_remote_and_mirrors(self, db):
        remote = InMemoryDocumentStore()
        await collection(db, remote).put(DOC)
        assert remote.collections["tickets"]["MAS-001"] == DOC
        assert await LocalCache(db).read_records(TICKETS.cache_key) == [DOC]

    async def test_list_mirrors_into_cache(self, db):
        remote = InMemoryDocumentStore()
        remote.collections["tickets"] = {"MAS-001": DOC, "MAS-002": OTHER}
        records = await collection(db, remote).list()
        assert len(records) == 2
        assert len(await LocalCache(db).read_records(TICKETS.cache_key)) == 2

    async def test_filtered_list_replaces_only_matching(self, db):
        local = collection(db)
        await local.put(DOC)
        await local.put({**OTHER, "title": "stale"})

        remote = InMemoryDocumentStore()
        remote.collections["tickets"] = {"MAS-002": OTHER}
        await collection(db, remote).list({"requestingUserId": "client-fema1"})

        cached = {r["id"]: r for r in await LocalCache(db).read_records(TICKETS.cache_key)}
        assert cached["MAS-001"] == DOC
        assert cached["MAS-002"]["title"] == "Bug"

    async def test_missing_remotely_is_looked_up_locally(self, db):
        await collection(db).put(DOC)
        assert await collection(db, InMemoryDocumentStore()).get("MAS-001") == DOC


class TestConcurrentWrites:

    async def test_writes_to_different_records_are_all_kept(self, db):
        documents = [{**DOC, "id": f"MAS-{n:03d}"} for n in range(1, 6)]

        async def put(document):
            async with AsyncSessionLocal() as session:
                await collection(session).put(document)

        await asyncio.gather(*(put(document) for document in documents))
        stored = await collection(db).list()
        assert sorted(r["id"] for r in stored) == [d["id"] for d in documents]

    async def test_concurrent_mirroring_from_remote(self, db):
        remote = InMemoryDocumentStore()

        async def put(document):
            async with AsyncSessionLocal() as session:
                await collection(session, remote).put(document)

        await asyncio.gather(put(DOC), put(OTHER))
        cached = await LocalCache(db).read_records(TICKETS.cache_key)
        assert sorted(r["id"] for r in cached) == ["MAS-001", "MAS-002"]


class TestRemoteFailing:

    async def test_write_succeeds_locally(self, db, caplog):
        with caplog.at_level(logging.WARNING):
            result = await collection(db, FailingDocumentStore()).put(DOC)
        assert result == DOC
        assert await LocalCache(db).read_records(TICKETS.cache_key) == [DOC]
        assert "writing local cache only" in caplog.text

    async def test_read_falls_back_with_warning(self, db, caplog):
        await collection(db).put(DOC)
        with caplog.at_level(logging.WARNING):
            records = await collection(db, FailingDocumentStore()).list()
        assert records == [DOC]
        assert "falling back to local cache" in caplog.text

    async def test_fallback_returns_same_shape_as_remote(self, db):
        remote = InMemoryDocumentStore()
        await collection(db, remote).put(DOC)
        from_remote = await collection(db, remote).get("MAS-001")
        from_cache = await collection(db, FailingDocumentStore()).get("MAS-001")
        assert from_cache == from_remote


class TestSeeding:

    async def test_seeds_local_cache_once(self, db):
        tickets = collection(db)
        await tickets.ensure_seeded([DOC])
        await tickets.ensure_seeded([OTHER])
        assert await tickets.list() == [DOC]

    async def test_seeds_remote_when_first_document_missing(self, db):
        remote = InMemoryDocumentStore()
        await collection(db, remote).ensure_seeded([DOC, OTHER])
        assert set(remote.collections["tickets"]) == {"MAS-001", "MAS-002"}

        remote.writes.clear()
        await collection(db, remote).ensure_seeded([DOC, OTHER])
        assert remote.writes == []

    async def test_seeding_survives_failing_remote(self, db):
        await collection(db, FailingDocumentStore()).ensure_seeded([DOC])
        assert await collection(db).list() == [DOC]


class TestLocalCache:

    async def test_invalid_json_reads_as_empty(self, db):
        cache = LocalCache(db)
        await cache.set_item(TICKETS.cache_key, "{not json")
        assert await cache.read_records(TICKETS.cache_key) == []

    async def test_non_array_reads_as_empty(self, db):
        cache = LocalCache(db)
        await cache.set_item(TICKETS.cache_key, '{"id": "MAS-001"}')
        assert await cache.read_records(TICKETS.cache_key) == []
