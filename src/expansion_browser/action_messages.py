"""UI-facing copy builders for toasts and CLI errors."""

from __future__ import annotations

COPY_SUCCESS_MESSAGE = "Copied to clipboard!"
COPY_FAILURE_MESSAGE = "Failed to copy"
NOTHING_TO_COPY_MESSAGE = "Nothing to copy"


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_bulk_copy_notification(item_count: int) -> str:
    """Build the success toast for copying every visible expansion."""
    return f"Copied {item_count} item{'s' if item_count != 1 else ''}!"


def build_export_success_notification(format_name: str) -> str:
    """Build the success toast for a finished export."""
    return f"{format_name} Exported Successfully"


def build_export_failure_notification(format_name: str, why: str) -> str:
    """Build the error toast for a failed export."""
    return f"Failed to export {format_name}: {why}"


def build_results_summary(shown: int, total: int) -> str:
    """Build the status line shown above the result list."""
    if shown == total:
        return f"Showing {shown} results"
    return f"Showing {shown} of {total} results"


__all__ = [
    "COPY_FAILURE_MESSAGE",
    "COPY_SUCCESS_MESSAGE",
    "NOTHING_TO_COPY_MESSAGE",
    "build_actionable_error",
    "build_bulk_copy_notification",
    "build_export_failure_notification",
    "build_export_success_notification",
    "build_next_step_hint",
    "build_results_summary",
]
