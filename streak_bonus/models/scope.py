"""Aggregation scope models"""
from typing import Iterable, Optional
from pydantic import BaseModel, ConfigDict


def normalize_identity(identity: Optional[str]) -> str:
    return str(identity or "").strip().lower()


class Scope(BaseModel):
    """
    Set of identities whose log rows are aggregated together.

    members is None for the unfiltered global scope; otherwise it holds
    lower-cased identities and matching is case-insensitive.
    """
    model_config = ConfigDict(frozen=True)

    identity: Optional[str] = None
    household_id: Optional[str] = None
    members: Optional[frozenset[str]] = None

    @classmethod
    def global_scope(cls) -> "Scope":
        return cls()

    @classmethod
    def individual(cls, identity: str) -> "Scope":
        return cls(identity=identity, members=frozenset({normalize_identity(identity)}))

    @classmethod
    def household(cls, household_id: str, members: Iterable[str], identity: Optional[str] = None) -> "Scope":
        normalized = frozenset(normalize_identity(m) for m in members if normalize_identity(m))
        return cls(identity=identity, household_id=household_id, members=normalized)

    @property
    def is_household(self) -> bool:
        return self.household_id is not None

    @property
    def is_global(self) -> bool:
        return self.members is None

    def includes(self, identity: Optional[str]) -> bool:
        if self.members is None:
            return True
        return normalize_identity(identity) in self.members

    def describe(self) -> str:
        if self.is_global:
            return "global"
        if self.is_household:
            return f"household {self.household_id} ({len(self.members)} members)"
        return f"individual {self.identity}"
