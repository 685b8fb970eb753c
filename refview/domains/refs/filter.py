"""Ref list rows and the filter applied to them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from refview.filtering.adapter import EntityFilter
from refview.filtering.fields import Field, FieldTable, FieldType


class RenderedRefType(Enum):
    LOCAL_BRANCH_GROUP = "local_branch_group"
    REMOTE_BRANCH_GROUP = "remote_branch_group"
    LOCAL_BRANCH = "local_branch"
    REMOTE_BRANCH = "remote_branch"
    TAG_GROUP = "tag_group"
    TAG = "tag"
    SPACE = "space"
    LOADING = "loading"


STRUCTURAL_REF_TYPES = frozenset(
    {
        RenderedRefType.LOCAL_BRANCH_GROUP,
        RenderedRefType.REMOTE_BRANCH_GROUP,
        RenderedRefType.TAG_GROUP,
        RenderedRefType.SPACE,
        RenderedRefType.LOADING,
    }
)


@dataclass(frozen=True)
class RenderedRef:
    """One row of the ref view as rendered (value may carry indentation)."""

    value: str
    ref_type: RenderedRefType

    @property
    def is_structural(self) -> bool:
        return self.ref_type in STRUCTURAL_REF_TYPES


REF_FIELDS = FieldTable(
    {
        "name": Field(FieldType.STRING, lambda ref: ref.value.lstrip(" ")),
    }
)


class RefFilter(EntityFilter):
    """Filter for ref view rows; group headers and placeholders always show."""

    descriptor = REF_FIELDS

    def is_structural(self, entity: RenderedRef) -> bool:
        return entity.is_structural
