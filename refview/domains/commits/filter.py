"""Commit list entities and the filter applied to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from refview.filtering.adapter import EntityFilter
from refview.filtering.fields import Field, FieldTable, FieldType


@dataclass(frozen=True)
class Signature:
    name: str
    email: str
    when: datetime


@dataclass(frozen=True)
class CommitRecord:
    """The commit attributes exposed to filters."""

    id: str
    summary: str
    author: Signature
    committer: Signature
    parent_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def parent_count(self) -> int:
        return len(self.parent_ids)


COMMIT_FIELDS = FieldTable(
    {
        "authorName": Field(FieldType.STRING, lambda commit: commit.author.name),
        "authorEmail": Field(FieldType.STRING, lambda commit: commit.author.email),
        "authorDate": Field(FieldType.DATE, lambda commit: commit.author.when),
        "committerName": Field(FieldType.STRING, lambda commit: commit.committer.name),
        "committerEmail": Field(FieldType.STRING, lambda commit: commit.committer.email),
        "committerDate": Field(FieldType.DATE, lambda commit: commit.committer.when),
        "id": Field(FieldType.STRING, lambda commit: commit.id),
        "summary": Field(FieldType.STRING, lambda commit: commit.summary),
        "parentCount": Field(FieldType.NUMBER, lambda commit: float(commit.parent_count)),
    }
)


class CommitFilter(EntityFilter):
    """Filter for commit rows; every commit row is data."""

    descriptor = COMMIT_FIELDS
