# Overview: Capability checks; the single gate in front of every mutation.

"""
Role-Based Capability Checks

WHY: Every mutating service calls require_capability() before touching the
repository. A denied check is a hard failure (Unauthorized), never a warning
that lets the operation continue.

DESIGN PRINCIPLES:
- Fail closed: unknown roles and unknown capability codes are denied
- One matrix: capabilities come only from workshop.permissions.roles
"""

from __future__ import annotations

from ..domain import User
from ..errors import Unauthorized
from ..permissions import get_role_permissions, validate_permission_code


def get_user_permissions(actor: User | None) -> frozenset:
    if actor is None:
        return frozenset()
    return frozenset(get_role_permissions(actor.role))


def authorize(actor: User | None, capability: str) -> bool:
    """True when the actor's role grants the capability."""
    if not validate_permission_code(capability):
        return False
    return capability in get_user_permissions(actor)


def require_capability(actor: User | None, capability: str) -> None:
    """
    Raise Unauthorized unless the actor holds the capability.

    Raises:
        Unauthorized: carries the capability code and the actor's role
    """
    if not authorize(actor, capability):
        raise Unauthorized(
            f"Missing capability: {capability}",
            details={
                "required_permission": capability,
                "role": actor.role if actor else None,
            },
        )
