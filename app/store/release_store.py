"""
Release Store — In-memory storage for repositories, releases and risk items.

Releases are kept in insertion order and served newest first.
Upgradeable to Postgres/SQLite by swapping the storage backend.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from app.models.release_models import Release, ReleaseRisk, Repository, RiskItem, utc_now


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class StoredRelease:
    """A release together with its risk items."""

    release: Release
    risks: list[ReleaseRisk] = field(default_factory=list)


class ReleaseStore:
    """In-memory release store keyed by release id."""

    def __init__(self) -> None:
        self._repositories: dict[str, Repository] = {}  # full_name -> repository
        self._releases: dict[str, StoredRelease] = {}

    # ── Repositories ──

    def upsert_repository(
        self,
        repo_id: str,
        repo_name: str,
        owner: str,
        full_name: str,
    ) -> Repository:
        """Return the repository for ``full_name``, creating or refreshing it."""
        existing = self._repositories.get(full_name)
        if existing is not None:
            updated = existing.model_copy(
                update={
                    "repo_id": repo_id,
                    "repo_name": repo_name,
                    "owner": owner,
                    "updated_at": utc_now(),
                }
            )
            self._repositories[full_name] = updated
            return updated

        repository = Repository(
            id=new_id(),
            repo_id=repo_id,
            repo_name=repo_name,
            owner=owner,
            full_name=full_name,
        )
        self._repositories[full_name] = repository
        return repository

    def get_repository(self, repository_id: str) -> Repository | None:
        for repository in self._repositories.values():
            if repository.id == repository_id:
                return repository
        return None

    # ── Releases ──

    def add_release(
        self,
        repository: Repository,
        fields: dict[str, Any],
        risk_items: Sequence[RiskItem],
    ) -> StoredRelease:
        """Create a release for ``repository`` and attach its generated risk items."""
        release = Release(
            id=new_id(),
            repo_id=repository.id,
            repo_name=repository.repo_name,
            owner=repository.owner,
            full_name=repository.full_name,
            **fields,
        )
        risks = [
            ReleaseRisk(
                id=new_id(),
                release_id=release.id,
                auto_generated=True,
                **item.model_dump(),
            )
            for item in risk_items
        ]
        stored = StoredRelease(release=release, risks=risks)
        self._releases[release.id] = stored
        return stored

    def get_release(self, release_id: str) -> StoredRelease | None:
        return self._releases.get(release_id)

    def list_releases(
        self,
        limit: int,
        offset: int = 0,
        full_name: str | None = None,
    ) -> list[Release]:
        """Releases newest first, optionally for one repository."""
        releases = self._newest_first(full_name)
        return releases[offset : offset + limit]

    def latest_release(self, full_name: str | None = None) -> StoredRelease | None:
        releases = self._newest_first(full_name)
        if not releases:
            return None
        return self._releases[releases[0].id]

    def count_releases(self, full_name: str | None = None) -> int:
        return len(self._newest_first(full_name))

    def get_risks(self, release_id: str) -> list[ReleaseRisk]:
        stored = self._releases.get(release_id)
        return list(stored.risks) if stored else []

    def _newest_first(self, full_name: str | None) -> list[Release]:
        releases = [
            s.release
            for s in self._releases.values()
            if full_name is None or s.release.full_name == full_name
        ]
        releases.reverse()
        return releases
