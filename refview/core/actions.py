"""Semantic action identifiers produced by key resolution."""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """An operation requested by the user.

    Actions are identifiers only; executing them is the job of the view that
    receives the resolved action.
    """

    NONE = "none"

    HISTORY_NEXT_VIEW = "history_next_view"

    REF_SELECT = "ref_select"
    REF_PREV = "ref_prev"
    REF_NEXT = "ref_next"
    REF_SCROLL_RIGHT = "ref_scroll_right"
    REF_SCROLL_LEFT = "ref_scroll_left"

    COMMIT_PREV = "commit_prev"
    COMMIT_NEXT = "commit_next"
    COMMIT_SCROLL_RIGHT = "commit_scroll_right"
    COMMIT_SCROLL_LEFT = "commit_scroll_left"

    DIFF_PREV_LINE = "diff_prev_line"
    DIFF_NEXT_LINE = "diff_next_line"
    DIFF_SCROLL_RIGHT = "diff_scroll_right"
    DIFF_SCROLL_LEFT = "diff_scroll_left"


ACTION_NONE = Action.NONE

ACTION_LABELS: dict[Action, str] = {
    Action.HISTORY_NEXT_VIEW: "Next view",
    Action.REF_SELECT: "Select ref",
    Action.REF_PREV: "Previous ref",
    Action.REF_NEXT: "Next ref",
    Action.REF_SCROLL_RIGHT: "Scroll right",
    Action.REF_SCROLL_LEFT: "Scroll left",
    Action.COMMIT_PREV: "Previous commit",
    Action.COMMIT_NEXT: "Next commit",
    Action.COMMIT_SCROLL_RIGHT: "Scroll right",
    Action.COMMIT_SCROLL_LEFT: "Scroll left",
    Action.DIFF_PREV_LINE: "Previous line",
    Action.DIFF_NEXT_LINE: "Next line",
    Action.DIFF_SCROLL_RIGHT: "Scroll right",
    Action.DIFF_SCROLL_LEFT: "Scroll left",
}


def parse_action(name: str) -> Action | None:
    """Look up an action by its identifier, ignoring case and dashes."""
    raw = name.strip().lower().replace("-", "_")
    try:
        return Action(raw)
    except ValueError:
        return None
