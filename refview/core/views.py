"""View identifiers and the focus chain used for key resolution."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum


class ViewId(str, Enum):
    """Closed set of views that can hold focus."""

    MAIN = "main"
    HISTORY = "history"
    REF = "ref"
    COMMIT = "commit"
    DIFF = "diff"


def parse_view_id(name: str) -> ViewId | None:
    """Look up a view by name, ignoring case."""
    try:
        return ViewId(name.strip().lower())
    except ValueError:
        return None


class ViewHierarchy:
    """Focus chain of views, innermost (focused) view first.

    Built fresh by the view stack for each key press; the dispatcher never
    keeps a reference to it.
    """

    __slots__ = ("_views",)

    def __init__(self, views: Iterable[ViewId] = ()) -> None:
        self._views: tuple[ViewId, ...] = tuple(views)

    @classmethod
    def from_outermost(cls, views: Iterable[ViewId]) -> ViewHierarchy:
        """Build from a root-to-leaf path (outermost view first)."""
        return cls(reversed(tuple(views)))

    @property
    def innermost(self) -> ViewId | None:
        return self._views[0] if self._views else None

    def child(self, view_id: ViewId) -> ViewHierarchy:
        """Return a new hierarchy with ``view_id`` focused inside this one."""
        return ViewHierarchy((view_id, *self._views))

    def __iter__(self) -> Iterator[ViewId]:
        return iter(self._views)

    def __len__(self) -> int:
        return len(self._views)

    def __getitem__(self, index: int) -> ViewId:
        return self._views[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ViewHierarchy):
            return self._views == other._views
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._views)

    def __repr__(self) -> str:
        inner = ", ".join(view.name for view in self._views)
        return f"ViewHierarchy([{inner}])"
