# Overview: User administration (owner only).

from __future__ import annotations

from datetime import datetime

from ..domain import Action, User
from ..errors import ConflictError, NotFound, ValidationError
from ..repositories import Repository
from ..time_utils import utcnow
from ..validation import USER_POLICY, enforce_rules_user, validate_payload
from . import audit_service
from .permission_service import require_capability


def get_user(repo: Repository, user_id: int) -> User | None:
    """Plain lookup used to resolve the acting user; no capability needed."""
    return repo.get("users", user_id)


def list_users(repo: Repository, actor: User) -> list[User]:
    require_capability(actor, "MANAGE_USERS")
    return repo.list("users")


def _require_unique_email(repo: Repository, email: str, exclude_id: int | None = None) -> None:
    for user in repo.list("users"):
        if user.email.lower() == email and user.id != exclude_id:
            raise ConflictError("Email already in use", details={"email": email})


def add_user(repo: Repository, actor: User, payload: dict, now: datetime | None = None) -> User:
    require_capability(actor, "MANAGE_USERS")
    patch = validate_payload(payload=payload, policy=USER_POLICY, partial=False)
    enforce_rules_user(patch)
    _require_unique_email(repo, patch["email"])
    now = now or utcnow()

    user = User(name=patch["name"], email=patch["email"], role=patch["role"], created_at=now)
    with repo.unit_of_work():
        user.id = repo.insert("users", user)
        audit_service.record(
            repo,
            actor,
            Action.ADD_USER,
            f"Added user: {user.name} ({user.role})",
            "user",
            entity_id=user.id,
            occurred_at=now,
        )
    return user


def update_user(repo: Repository, actor: User, user_id: int, payload: dict, now: datetime | None = None) -> User:
    require_capability(actor, "MANAGE_USERS")
    existing = repo.get("users", user_id)
    if existing is None:
        raise NotFound("User not found", details={"user_id": user_id})
    patch = validate_payload(payload=payload, policy=USER_POLICY, partial=True)
    if not patch:
        raise ValidationError("No fields to update")
    enforce_rules_user(patch)
    if "email" in patch:
        _require_unique_email(repo, patch["email"], exclude_id=user_id)

    with repo.unit_of_work():
        repo.update("users", user_id, patch)
        updated = repo.get("users", user_id)
        audit_service.record(
            repo,
            actor,
            Action.UPDATE_USER,
            f"Updated user: {updated.name}",
            "user",
            entity_id=user_id,
            occurred_at=now,
        )
    return updated


def bootstrap_owner(repo: Repository, name: str, email: str, now: datetime | None = None) -> User:
    """
    Create the first owner of an empty workshop.

    There is no actor to authorize against yet, so this refuses to run once
    any user exists.
    """
    if repo.list("users"):
        raise ConflictError("Users already exist; add further users through an owner")
    now = now or utcnow()
    user = User(name=name, email=email.strip().lower(), role="owner", created_at=now)
    with repo.unit_of_work():
        user.id = repo.insert("users", user)
        audit_service.record(
            repo,
            user,
            Action.ADD_USER,
            f"Added user: {user.name} (owner)",
            "user",
            entity_id=user.id,
            occurred_at=now,
        )
    return user
