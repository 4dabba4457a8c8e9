# ampd/models.py
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class GameListingResult:
    """
    What a storefront listing told us about a game.

    Every field is optional; a partial (or empty) result is a normal outcome.
    Built by successive `fill` calls so that the first extraction method to
    find a value keeps it.
    """
    game_name: Optional[str] = None
    package_identifier: Optional[str] = None
    logo_url: Optional[str] = None

    def fill(self, **values: Optional[str]) -> "GameListingResult":
        """Return a copy with only the still-empty fields set."""
        updates = {}
        for name, value in values.items():
            if not value:
                continue
            if getattr(self, name) is None:
                updates[name] = value
        return replace(self, **updates) if updates else self

    def missing(self, name: str) -> bool:
        return getattr(self, name) is None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, str]:
        """Wire shape: only the keys that were found."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class AuthorizationSubject:
    """The signed-in staff member asking to manage something."""
    id: str
    role: str  # "admin" | "am"
    is_active: bool = True

    @classmethod
    def from_profile(cls, profile: Optional[Mapping[str, Any]]) -> Optional["AuthorizationSubject"]:
        if not profile:
            return None
        return cls(
            id=str(profile.get("id") or ""),
            role=str(profile.get("role") or ""),
            is_active=bool(profile.get("is_active", True)),
        )


@dataclass(frozen=True)
class CachedListing:
    """
    Row model for the CSV cache and batch output.

    Mirrors the columns written to results.csv.
    """
    url: str
    platform: str
    result: GameListingResult
    fetched_utc_iso: str
    error: str = ""  # empty means OK
