"""Collections of the portal, each backed by the remote store with local fallback."""
from sqlalchemy.ext.asyncio import AsyncSession
from portal.connectors.document_store import get_document_store
from portal.stores.fallback import CollectionSpec, FallbackCollection
from portal.stores.local_cache import LocalCache

TICKETS = CollectionSpec(
    name="tickets",
    cache_key="portal_tickets_cache_v6",
    seeded_flag="portal_tickets_seeded_v6",
)
DEPLOYMENTS = CollectionSpec(
    name="deployments",
    cache_key="portal_deployments_cache_v1",
    seeded_flag="portal_deployments_seeded_v1",
)
COMMITS = CollectionSpec(
    name="commits",
    cache_key="portal_commits_cache_v1",
    seeded_flag="portal_commits_seeded_v1",
    id_field="sha",
)
USERS = CollectionSpec(
    name="users",
    cache_key="portal_users_cache_v1",
    seeded_flag="portal_users_seeded_v1",
)
ORGANIZATIONS = CollectionSpec(
    name="organizations",
    cache_key="portal_organizations_cache_v1",
    seeded_flag="portal_organizations_seeded_v1",
)

ALL_COLLECTIONS = [TICKETS, DEPLOYMENTS, COMMITS, USERS, ORGANIZATIONS]


def get_collection(db: AsyncSession, spec: CollectionSpec) -> FallbackCollection:
    """Open a collection on the request's session and the configured remote store."""
    return FallbackCollection(spec, LocalCache(db), get_document_store())


__all__ = [
    "ALL_COLLECTIONS",
    "COMMITS",
    "DEPLOYMENTS",
    "ORGANIZATIONS",
    "TICKETS",
    "USERS",
    "CollectionSpec",
    "FallbackCollection",
    "LocalCache",
    "get_collection",
]
