"""Commit message composition and validation."""

from __future__ import annotations

from commit_helper.models import (
    FORBIDDEN_CHARACTERS,
    LONG_DESCRIPTION_LIMIT,
    SHORT_DESCRIPTION_LIMIT,
    ActionTag,
    CommitDraft,
)

WRAP_WIDTH = 80


def validate_description(text: str, *, limit: int, label: str, required: bool) -> str | None:
    """Check a description typed by the user.

    Args:
        text: The text to check.
        limit: Maximum number of characters.
        label: Name of the field used in the error message.
        required: Whether empty text is an error.

    Returns:
        An error message, or None if the text is acceptable.
    """
    if any(char in text for char in FORBIDDEN_CHARACTERS):
        return f"The {label} cannot contain backticks (`) or double quotes (\")."
    if len(text) > limit:
        return f"The {label} must not exceed {limit} characters ({len(text)})"
    if required and not text:
        return f"The {label} cannot be empty."
    return None


def validate_module(text: str) -> str | None:
    """Check a module name typed by the user or read from a directory."""
    if any(char in text for char in FORBIDDEN_CHARACTERS):
        return "The module cannot contain backticks (`) or double quotes (\")."
    if not text:
        return "The module cannot be empty."
    return None


def validate_short_description(text: str) -> str | None:
    return validate_description(
        text, limit=SHORT_DESCRIPTION_LIMIT, label="short description", required=True
    )


def validate_long_description(text: str) -> str | None:
    return validate_description(
        text, limit=LONG_DESCRIPTION_LIMIT, label="long description", required=False
    )


def wrap_text(text: str, width: int = WRAP_WIDTH) -> str:
    """Cut text into lines of at most `width` characters.

    Wrapping is by character count, not on word boundaries.
    """
    if not text:
        return ""
    return "\n".join(text[i:i + width] for i in range(0, len(text), width))


def render(draft: CommitDraft) -> str:
    """Render a validated draft as the final commit message."""
    header = f"[{draft.action.value}] {draft.module}: {draft.short_description}"
    return f"\n{header}\n\n{wrap_text(draft.long_description)}"


def compose(
    action: ActionTag | str,
    module: str,
    short_description: str,
    long_description: str = "",
) -> str:
    """Validate the fields and build the commit message.

    Raises:
        pydantic.ValidationError: If any field is invalid.
    """
    draft = CommitDraft(
        action=action,
        module=module,
        short_description=short_description,
        long_description=long_description,
    )
    return render(draft)


def build_commit_command(message: str) -> str:
    """Return the shell command that commits with `message`."""
    return f'git commit -m "{message}"'
