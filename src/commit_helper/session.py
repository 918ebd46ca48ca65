"""Single-flight workflow session.

Only one commit workflow may run at a time. The active workflow is recorded
in a small JSON file so that a separate `commit-helper cancel` invocation can
see and reset it. The record is created atomically when a workflow starts and
removed on every exit path.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from commit_helper.logging import get_logger
from commit_helper.prompts import PromptCancelled

logger = get_logger("session")


class WorkflowState(str, Enum):
    """Position of a workflow in the prompt sequence."""

    IDLE = "idle"
    ACTION_SELECTED = "action_selected"
    MODULE_SELECTED = "module_selected"
    SHORT_DESCRIPTION_ENTERED = "short_description_entered"
    LONG_DESCRIPTION_ENTERED = "long_description_entered"
    COMPOSED = "composed"
    DISPATCHED = "dispatched"


class SessionRecord(BaseModel):
    """Persisted state of the active workflow."""

    state: WorkflowState = Field(default=WorkflowState.IDLE)
    started_at: str = Field(description="Start time as ISO string")
    pid: int = Field(description="Process running the workflow")


class WorkflowCancelled(PromptCancelled):
    """Raised when the workflow was cancelled from another invocation."""
    pass


class SessionBusyError(Exception):
    """Raised when a workflow is already in progress."""
    pass


class WorkflowSession:
    """Owns the single-flight guard for commit workflows."""

    def __init__(self, path: Path):
        self.path = path
        self.state = WorkflowState.IDLE

    def current(self) -> SessionRecord | None:
        """Return the active record, or None when no workflow is running."""
        try:
            with open(self.path, "r") as f:
                return SessionRecord(**json.load(f))
        except FileNotFoundError:
            return None
        except (OSError, ValueError, ValidationError) as e:
            # An unparsable record still blocks new workflows until cancelled.
            logger.warning("Corrupt session record %s: %s", self.path, e)
            return SessionRecord(started_at="unknown", pid=0)

    def is_active(self) -> bool:
        return self.path.exists()

    @contextmanager
    def acquire(self) -> Iterator[WorkflowSession]:
        """Hold the guard for the duration of one workflow.

        Raises:
            SessionBusyError: If another workflow holds the guard.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        record = SessionRecord(
            started_at=datetime.now(timezone.utc).isoformat(),
            pid=os.getpid(),
        )
        try:
            with open(self.path, "x") as f:
                json.dump(record.model_dump(mode="json"), f, indent=2)
        except FileExistsError:
            raise SessionBusyError("A commit workflow is already in progress.")

        self.state = WorkflowState.IDLE
        logger.debug("Session acquired at %s", self.path)
        try:
            yield self
        finally:
            record = self.current()
            # After an external cancel the record may belong to a newer workflow.
            if record is not None and record.pid == os.getpid():
                self._release()
            self.state = WorkflowState.IDLE

    def advance(self, state: WorkflowState) -> None:
        """Record the next workflow state.

        Raises:
            WorkflowCancelled: If the record was removed by `cancel`.
        """
        record = self.current()
        if record is None or record.pid != os.getpid():
            raise WorkflowCancelled("The commit workflow was cancelled.")
        record.state = state
        with open(self.path, "w") as f:
            json.dump(record.model_dump(mode="json"), f, indent=2)
        self.state = state
        logger.debug("Workflow state: %s", state.value)

    def cancel(self) -> bool:
        """Reset the guard.

        Returns:
            True if an active workflow was cancelled, False if none was active.
        """
        if not self.is_active():
            return False
        self._release()
        return True

    def _release(self) -> None:
        self.path.unlink(missing_ok=True)
        self.state = WorkflowState.IDLE
        logger.debug("Session released")
