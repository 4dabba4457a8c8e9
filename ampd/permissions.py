# ampd/permissions.py
"""
Who may edit or delete accounts, games and campaigns.

Admins manage everything. Account managers ("am") manage only what is
assigned to them. Games and campaigns inherit the assignment of their
parent account, so callers pass the account's assignee, see
`governing_assignee`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .config import ROLE_ADMIN, ROLE_AM
from .models import AuthorizationSubject

Subject = Union[AuthorizationSubject, Mapping[str, Any], None]


def _coerce(subject: Subject) -> Optional[AuthorizationSubject]:
    if subject is None or isinstance(subject, AuthorizationSubject):
        return subject
    return AuthorizationSubject.from_profile(subject)


def can_manage(subject: Subject, assigned_user_id: str) -> bool:
    s = _coerce(subject)
    if s is None:
        return False
    if s.role == ROLE_ADMIN:
        return True
    if s.role == ROLE_AM:
        return bool(s.id) and s.id == assigned_user_id
    return False


can_manage_account = can_manage
can_manage_game = can_manage
can_manage_campaign = can_manage


def governing_assignee(resource_assignee: Optional[str], account_assignee: Optional[str] = None) -> str:
    """The account's assignee wins over the resource's own when known."""
    if account_assignee is not None:
        return account_assignee
    return resource_assignee or ""


# -----------------------------
# Dialog copy
# -----------------------------

@dataclass(frozen=True)
class DialogCopy:
    title: str
    description: str
    confirm_label: Optional[str]  # None: no confirm button
    cancel_label: str = "Close"


_CONFIRM = {
    "account": "This action cannot be undone. This will permanently delete the account {name} and all associated games and campaigns.",
    "game": "This action cannot be undone. This will permanently delete the game {name} from your account.",
    "campaign": "This action cannot be undone. This will permanently delete the campaign {name} from your account.",
}

_DENIED = {
    "account": "You can only delete accounts assigned to you. This account {name} is assigned to another user.",
    "game": "You can only delete games from accounts assigned to you. This game {name} is from an account assigned to another user.",
    "campaign": "You can only delete campaigns from accounts assigned to you. This campaign {name} is from an account assigned to another user.",
}

_DENIED_TOAST = {
    "account": "You can only delete accounts assigned to you.",
    "game": "You can only delete games from accounts assigned to you.",
    "campaign": "You can only delete campaigns from accounts assigned to you.",
}


def _check_kind(kind: str) -> None:
    if kind not in _CONFIRM:
        raise ValueError(f"unknown resource kind: {kind!r}")


def delete_dialog(kind: str, name: str, allowed: bool) -> DialogCopy:
    _check_kind(kind)
    if allowed:
        return DialogCopy(
            title="Are you sure?",
            description=_CONFIRM[kind].format(name=name),
            confirm_label="Delete",
        )
    return DialogCopy(
        title=f"Cannot Delete {kind.capitalize()}",
        description=_DENIED[kind].format(name=name),
        confirm_label=None,
    )


def denied_toast(kind: str) -> str:
    _check_kind(kind)
    return _DENIED_TOAST[kind]
