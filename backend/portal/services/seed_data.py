"""Initial portal data, seeded into every collection on first start."""
import logging
from datetime import timedelta
from typing import Any, Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from portal.models.base import utc_now
from portal.services.user_service import hash_password
from portal.stores import COMMITS, DEPLOYMENTS, ORGANIZATIONS, TICKETS, USERS, get_collection

logger = logging.getLogger(__name__)

SEED_TICKETS: List[Dict[str, Any]] = [
    {
        "id": "MAS-001",
        "title": "Implement local feature X",
        "description": "Details about local feature X implementation.",
        "status": "En Progreso",
        "type": "Nueva Funcionalidad",
        "assigneeId": "admin",
        "lastUpdated": "2024-07-28T10:00:00Z",
        "provider": "TLA",
        "branch": "DEV",
        "priority": "Media",
        "requestingUserId": "client-tla1",
        "githubRepository": "maximo-tla",
        "attachmentNames": ["script_ABC.py", "config_XYZ.xml"],
        "history": [
            {"id": "hist-1", "timestamp": "2024-07-28T09:00:00Z", "userId": "client-tla1", "action": "Created",
             "toStatus": "Abierto", "toType": "Nueva Funcionalidad", "details": "Ticket Creado", "ticketId": "MAS-001"},
            {"id": "hist-2", "timestamp": "2024-07-28T10:00:00Z", "userId": "admin", "action": "Status Changed",
             "fromStatus": "Abierto", "toStatus": "En Progreso", "details": "Estado cambiado de Abierto a En Progreso",
             "ticketId": "MAS-001"},
        ],
    },
    {
        "id": "MAS-002",
        "title": "Fix local bug Y",
        "description": "Users are unable to perform action Y.",
        "status": "Resuelto",
        "type": "Bug",
        "assigneeId": "admin",
        "lastUpdated": "2024-07-27T15:30:00Z",
        "provider": "FEMA",
        "branch": "QA",
        "priority": "Alta",
        "requestingUserId": "client-fema1",
        "githubRepository": "maximo-fema",
        "attachmentNames": ["debug_log.txt", "screenshot_error.png"],
        "history": [
            {"id": "hist-3", "timestamp": "2024-07-27T14:00:00Z", "userId": "client-fema1", "action": "Created",
             "toStatus": "Abierto", "toType": "Bug", "details": "Ticket Creado", "ticketId": "MAS-002"},
            {"id": "hist-4", "timestamp": "2024-07-27T15:30:00Z", "userId": "admin", "action": "Status Changed",
             "fromStatus": "En Progreso", "toStatus": "Resuelto", "details": "Estado cambiado de En Progreso a Resuelto",
             "ticketId": "MAS-002"},
        ],
    },
    {
        "id": "MAS-003",
        "title": "Setup new local environment",
        "description": "Configure local environment for testing.",
        "status": "Abierto",
        "type": "Tarea",
        "lastUpdated": "2024-07-29T09:00:00Z",
        "provider": "System Corp",
        "priority": "Media",
        "requestingUserId": "superuser",
        "attachmentNames": [],
        "history": [
            {"id": "hist-5", "timestamp": "2024-07-29T09:00:00Z", "userId": "superuser", "action": "Created",
             "toStatus": "Abierto", "toType": "Tarea", "details": "Ticket Creado", "ticketId": "MAS-003"},
        ],
    },
]

SEED_DEPLOYMENTS: List[Dict[str, Any]] = [
    {
        "id": "deploy-1",
        "timestamp": "2024-07-25T10:00:00Z",
        "userId": "admin",
        "filesDeployed": [
            {"name": "script_ABC.py", "version": "1.2", "type": "script"},
            {"name": "config_XYZ.xml", "type": "xml"},
        ],
        "environment": "DEV",
        "status": "Success",
        "resultCode": "200",
        "ticketIds": ["MAS-001"],
    },
    {
        "id": "deploy-2",
        "timestamp": "2024-07-26T14:30:00Z",
        "userId": "another-admin",
        "filesDeployed": [{"name": "report_finance.rptdesign", "type": "report"}],
        "environment": "QA",
        "status": "Failure",
        "resultCode": "500",
        "message": "Database connection timeout during deployment.",
        "ticketIds": ["MAS-002"],
    },
]

SEED_ORGANIZATIONS: List[Dict[str, Any]] = [
    {"id": "tla", "name": "TLA", "githubRepository": "maximo-tla"},
    {"id": "fema", "name": "FEMA", "githubRepository": "maximo-fema"},
    {"id": "system-corp", "name": "System Corp"},
    {"id": "maximo-corp", "name": "Maximo Corp", "githubRepository": "maximo-corp"},
]

# (id, name, role, company)
SEED_USER_ROWS = [
    ("admin", "Administrator Portal", "admin", None),
    ("superuser", "Super Usuario Portal", "superuser", None),
    ("client-tla1", "Cliente TLA Primario", "client", "TLA"),
    ("client-fema1", "Cliente FEMA Primario", "client", "FEMA"),
    ("client-generic1", "Cliente Genérico Uno", "client", "System Corp"),
    ("client-tla2", "Cliente TLA Secundario", "client", "TLA"),
    ("another-admin", "Técnico Secundario", "admin", None),
]

# Authors of the seeded commits
SEED_AUTHORS = [
    ("alice-wonderland", "Alice Wonderland"),
    ("bob-the-builder", "Bob The Builder"),
    ("charlie-brown", "Charlie Brown"),
    ("diana-prince", "Diana Prince"),
]

DEFAULT_SEED_PASSWORD = "password123"


def build_seed_users() -> List[Dict[str, Any]]:
    """Seed users with hashed default passwords."""
    password_hash = hash_password(DEFAULT_SEED_PASSWORD)
    users = []
    for user_id, name, role, company in SEED_USER_ROWS:
        user = {
            "id": user_id,
            "username": user_id,
            "name": name,
            "email": f"{user_id}@maximo-portal.example.com",
            "role": role,
            "passwordHash": password_hash,
        }
        if company:
            user["company"] = company
        users.append(user)
    for user_id, name in SEED_AUTHORS:
        users.append({
            "id": user_id,
            "username": user_id,
            "name": name,
            "email": f"{user_id}@maximo-portal.example.com",
            "role": "admin",
            "passwordHash": password_hash,
        })
    return users


def build_seed_commits() -> List[Dict[str, Any]]:
    """Seed commits spread over the last weeks."""
    now = utc_now()
    rows = [
        ("a1b2c3d4e5f6", "Feat: Implement user authentication module", "Alice Wonderland",
         "example/repo", 1, ["auth.py", "user_model.py"]),
        ("f6e5d4c3b2a1", "Fix: Resolve issue in payment processing", "Bob The Builder",
         "example/repo", 3, ["payment.js", "checkout.xml"]),
        ("c7g8h9i0j1k2", "Chore: Update dependencies and configuration", "Charlie Brown",
         "example/repo", 12, ["requirements.txt", "settings.xml"]),
        ("l3m4n5o6p7q8", "MAS-001: Add script_ABC automation script", "Diana Prince",
         "maximo-tla", 2, ["script_ABC.py"]),
        ("r9s0t1u2v3w4", "MAS-002: Fix report_finance data source", "Alice Wonderland",
         "maximo-fema", 20, ["report_finance.rptdesign"]),
    ]
    commits = []
    for sha, message, author, repository, days_ago, files in rows:
        commits.append({
            "sha": sha,
            "message": message,
            "author": author,
            "url": f"https://github.com/{repository}/commit/{sha}",
            "date": (now - timedelta(days=days_ago)).isoformat().replace("+00:00", "Z"),
            "filesChanged": files,
        })
    return commits


async def seed_all(db: AsyncSession) -> None:
    """Seed every collection that has not been seeded yet."""
    seeds = [
        (TICKETS, SEED_TICKETS),
        (DEPLOYMENTS, SEED_DEPLOYMENTS),
        (COMMITS, build_seed_commits()),
        (USERS, build_seed_users()),
        (ORGANIZATIONS, SEED_ORGANIZATIONS),
    ]
    for spec, documents in seeds:
        await get_collection(db, spec).ensure_seeded(documents)
    logger.info("Seed data check complete")
