"""The interactive commit workflow."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from commit_helper.composer import (
    build_commit_command,
    compose,
    validate_long_description,
    validate_module,
    validate_short_description,
)
from commit_helper.config import Config
from commit_helper.git_ops import GitError, create_commit, get_repo, get_repo_root
from commit_helper.locator import find_repositories, list_modules
from commit_helper.logging import get_logger
from commit_helper.models import ActionTag, DispatchMode, DispatchResult
from commit_helper.prompts import Validator
from commit_helper.session import WorkflowCancelled, WorkflowSession, WorkflowState

logger = get_logger("workflow")


class Prompter(Protocol):
    def select(self, title: str, options: Sequence[tuple[str, str]]) -> int: ...

    def text(
        self,
        prompt: str,
        placeholder: str = "",
        validate: Validator | None = None,
        required: bool = True,
    ) -> str: ...


def _check_preset(value: str, validator: Validator) -> str:
    error = validator(value)
    if error is not None:
        raise ValueError(error)
    return value


class CommitWorkflow:
    """Runs one commit workflow: prompts, composes and dispatches.

    Every step is a suspension point at which the user may cancel; the
    session guard is released whichever way the workflow ends.
    """

    def __init__(self, prompter: Prompter, session: WorkflowSession, config: Config):
        self.prompter = prompter
        self.session = session
        self.config = config

    def run(
        self,
        root: Path | None = None,
        *,
        action: ActionTag | str | None = None,
        module: str | None = None,
        short_description: str | None = None,
        long_description: str | None = None,
        mode: DispatchMode | None = None,
    ) -> DispatchResult:
        """Run the workflow to completion.

        Values given as arguments skip their prompt but are still validated.

        Raises:
            SessionBusyError: If another workflow is in progress.
            PromptCancelled: If the user cancels at any prompt.
            GitError: If no repository can be resolved or the commit fails.
            ValueError: If a preset value is invalid.
            OSError: If the workspace scan fails.
        """
        mode = mode or self.config.dispatch
        root = root or self.config.root

        with self.session.acquire():
            tag = self._select_action(action)
            self.session.advance(WorkflowState.ACTION_SELECTED)

            repository = self._resolve_repository(root, mode)
            module_name = self._select_module(repository, module)
            self.session.advance(WorkflowState.MODULE_SELECTED)

            if short_description is None:
                short_description = self.prompter.text(
                    "Briefly describe the changes made (maximum 80 characters)",
                    placeholder="Enter the short description",
                    validate=validate_short_description,
                )
            else:
                _check_preset(short_description, validate_short_description)
            self.session.advance(WorkflowState.SHORT_DESCRIPTION_ENTERED)

            if long_description is None:
                long_description = self.prompter.text(
                    "Provide a detailed description of the changes made (maximum 300 characters)",
                    placeholder="Enter the long description (optional)",
                    validate=validate_long_description,
                    required=False,
                )
            else:
                _check_preset(long_description, validate_long_description)
            self.session.advance(WorkflowState.LONG_DESCRIPTION_ENTERED)

            message = compose(tag, module_name, short_description, long_description)
            self.session.advance(WorkflowState.COMPOSED)

            result = self._dispatch(message, repository, mode)
            try:
                self.session.advance(WorkflowState.DISPATCHED)
            except WorkflowCancelled:
                # The commit already exists; a late cancel cannot undo it.
                logger.warning("Workflow was cancelled after dispatch, keeping the result")
            return result

    def _select_action(self, action: ActionTag | str | None) -> ActionTag:
        if isinstance(action, ActionTag):
            return action
        if action is not None:
            try:
                return ActionTag(action.upper())
            except ValueError:
                raise ValueError(f"Unknown action tag: {action}")
        tags = list(ActionTag)
        index = self.prompter.select(
            "Select the commit action",
            [(tag.value, tag.description) for tag in tags],
        )
        return tags[index]

    def _resolve_repository(self, root: Path | None, mode: DispatchMode) -> Path | None:
        if root is not None:
            repositories = find_repositories(root)
            if not repositories:
                raise GitError(f"No git repositories found under {root}")
            index = self.prompter.select(
                "Select the repository",
                [(entry.display_label, str(entry.path)) for entry in repositories],
            )
            return repositories[index].path

        try:
            return get_repo_root(get_repo(Path.cwd()))
        except GitError:
            if mode is DispatchMode.EXECUTE:
                raise
            logger.debug("No repository around %s, module will be typed", Path.cwd())
            return None

    def _select_module(self, repository: Path | None, module: str | None) -> str:
        if module is not None:
            return _check_preset(module, validate_module)
        modules: list[Path] = []
        if repository is not None:
            for path in list_modules(repository):
                if validate_module(path.name) is None:
                    modules.append(path)
                else:
                    logger.debug("Skipping unusable module name %r", path.name)
        if modules:
            index = self.prompter.select(
                "Which module is affected by this change?",
                [(path.name, str(path)) for path in modules],
            )
            return modules[index].name
        return self.prompter.text(
            "Which module is affected by this change?",
            placeholder="For example: auth, database, ui",
            validate=validate_module,
        )

    def _dispatch(self, message: str, repository: Path | None, mode: DispatchMode) -> DispatchResult:
        command = build_commit_command(message)
        if mode is DispatchMode.EXECUTE:
            if repository is None:
                raise GitError("No repository to commit in")
            commit_hash = create_commit(repository, message)
            logger.debug("Committed %s in %s", commit_hash, repository)
            return DispatchResult(
                message=message, command=command, repository=repository, commit_hash=commit_hash
            )
        return DispatchResult(message=message, command=command, repository=repository)
