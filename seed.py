"""
Create the initial staff accounts.

Run once against a fresh database:

    python seed.py

Skips everything when the users collection already has documents.
"""

import logging
import os
from typing import Optional

from auth import hash_password
from config import Settings
from database import USERS, Store, now_utc
from schemas import Role, User

logger = logging.getLogger(__name__)


def create_user(
    store: Store,
    username: str,
    password: str,
    role: Role = "manager",
    email: Optional[str] = None,
    full_name: Optional[str] = None,
    rounds: int = 10,
) -> str:
    user = User(
        username=username,
        password=hash_password(password, rounds=rounds),
        role=role,
        email=email,
        full_name=full_name,
        created_at=now_utc(),
    )
    return store.insert(USERS, user.to_document())


def init_users(store: Store) -> int:
    """Insert the admin and manager accounts; returns how many were created."""
    existing = store.count(USERS)
    if existing > 0:
        logger.warning(f"Users already exist ({existing}), skipping initialization")
        return 0

    create_user(
        store,
        os.getenv("ADMIN_USERNAME", "admin"),
        os.getenv("ADMIN_PASSWORD", "admin123"),
        role="admin",
        email="admin@comforthotel.com",
        full_name="Administrator",
    )
    create_user(
        store,
        "manager",
        os.getenv("MANAGER_PASSWORD", "manager123"),
        role="manager",
        email="manager@comforthotel.com",
        full_name="Hotel Manager",
    )
    logger.info("Admin and manager users created")
    return 2


if __name__ == "__main__":
    settings = Settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    store = Store.connect(settings.database_url, settings.database_name)
    store.open(settings.session_ttl_seconds)
    try:
        init_users(store)
    finally:
        store.close()
