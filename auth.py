"""
Staff authentication: credential checks, server side sessions and the
authorization gates used by the handlers.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from pydantic import ValidationError

from database import SESSIONS, USERS, Store, now_utc
from errors import Forbidden, Unauthenticated
from schemas import Actor, Session

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def require_authenticated(actor: Optional[Actor]) -> Actor:
    if actor is None:
        raise Unauthenticated()
    return actor


def require_admin(actor: Optional[Actor]) -> Actor:
    actor = require_authenticated(actor)
    if not actor.is_admin:
        raise Forbidden("Admin access required")
    return actor


def _as_utc(value: datetime) -> datetime:
    # pymongo hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionManager:
    """
    Creates, resolves and destroys login sessions kept in the `sessions`
    collection. Sessions expire a fixed time after login.
    """

    def __init__(self, store: Store, ttl_seconds: int = 24 * 60 * 60):
        self.store = store
        self.ttl = timedelta(seconds=ttl_seconds)

    def login(self, username: str, password: str) -> Session:
        """
        Verify credentials and open a new session.

        Unknown usernames and wrong passwords fail with the same message.
        """
        user = self.store.find_one(USERS, {"username": username})
        if user is None or not verify_password(password, user.get("password", "")):
            logger.warning(f"Failed login attempt for '{username}'")
            raise Unauthenticated(INVALID_CREDENTIALS)

        try:
            actor = Actor(
                id=str(user["_id"]),
                username=user["username"],
                role=user.get("role", "manager"),
                email=user.get("email"),
                full_name=user.get("fullName"),
            )
        except ValidationError:
            logger.error(f"User '{username}' has an invalid stored profile (role={user.get('role')!r})")
            raise Unauthenticated(INVALID_CREDENTIALS)
        created = now_utc()
        session = Session(
            token=secrets.token_urlsafe(32),
            user=actor,
            created_at=created,
            expires_at=created + self.ttl,
        )
        self.store.insert(SESSIONS, session.to_document())
        logger.info(f"User '{actor.username}' logged in")
        return session

    def resolve(self, token: Optional[str]) -> Optional[Actor]:
        if not token:
            return None
        doc = self.store.find_one(SESSIONS, {"token": token})
        if doc is None:
            return None
        if _as_utc(doc["expires_at"]) <= now_utc():
            return None
        return Actor.model_validate(doc["user"])

    def logout(self, token: Optional[str]) -> bool:
        if not token:
            return False
        removed = self.store.delete(SESSIONS, {"token": token})
        return removed > 0
