"""Help text generated from the live key binding table."""

from __future__ import annotations

from refview.core.actions import ACTION_LABELS, Action
from refview.core.dispatcher import KeyBindingManager
from refview.core.keymap import format_key
from refview.core.views import ViewId

VIEW_TITLES: dict[ViewId, str] = {
    ViewId.MAIN: "GLOBAL",
    ViewId.HISTORY: "HISTORY",
    ViewId.REF: "REFS",
    ViewId.COMMIT: "COMMITS",
    ViewId.DIFF: "DIFF",
}


def generate_help_text(keymap: KeyBindingManager) -> str:
    """Generate help text with one section per view that has bindings."""

    def section(title: str) -> str:
        divider = "-" * 62
        return f"[bold $primary]{title}[/]\n[dim]{divider}[/]"

    def binding(key: str, desc: str, indent: int = 4) -> str:
        pad = " " * indent
        return f"{pad}[bold $warning]{key:<14}[/] [dim]-[/] {desc}"

    lines: list[str] = []
    for view_id in ViewId:
        bindings = keymap.bindings_for_view(view_id)
        # Group keys by action so aliases share one line
        by_action: dict[Action, list[str]] = {}
        for key, action in bindings.items():
            if action == Action.NONE:
                continue
            by_action.setdefault(action, []).append(format_key(key))
        if not by_action:
            continue

        lines.append(section(VIEW_TITLES[view_id]))
        for action, keys in by_action.items():
            lines.append(binding("/".join(keys), ACTION_LABELS.get(action, action.value)))
        lines.append("")

    return "\n".join(lines).rstrip("\n")
