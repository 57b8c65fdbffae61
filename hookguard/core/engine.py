"""
Engine — Hook run orchestration.

The runner applies every configured file hook to every changed file,
records one outcome per (hook, file) pair, and aggregates them into a
decision for the whole change.

The runner is NOT where check logic lives.
"""

from typing import Optional, Sequence

from hookguard.core.context import HookChangeset, HookFile, HookRunRequest
from hookguard.core.contracts import FileHook
from hookguard.core.logging import RunLogger
from hookguard.ir.enums import OutcomeStatus, RunStatus
from hookguard.ir.schema import HookOutcome, HookRunResult


class HookRunner:
    """
    Runs file hooks over the changed files of a proposed change.

    Hooks hold no per-run state, so one runner can serve many runs.
    """

    def __init__(self, hooks: Sequence[FileHook] = (), raise_errors: bool = False) -> None:
        self._hooks: list[FileHook] = list(hooks)
        self.raise_errors = raise_errors

    @property
    def hook_names(self) -> list[str]:
        return [h.name for h in self._hooks]

    def run(self, request: HookRunRequest) -> HookRunResult:
        """
        Run all hooks over the request's changeset.

        Returns:
            HookRunResult with one outcome per (hook, file) pair
        """
        changeset = request.changeset
        rlog = RunLogger(request.request_id)
        rlog.run_start(files=len(changeset.files), hooks=self.hook_names)

        outcomes: list[HookOutcome] = []
        try:
            for hook_file in changeset.files:
                for hook in self._hooks:
                    outcomes.append(self._run_hook(hook, hook_file, rlog))
        except Exception:
            rlog.run_complete(status=RunStatus.ERROR.value, outcomes=len(outcomes))
            raise

        status = aggregate_status(outcomes)
        duration_ms = rlog.elapsed_ms()
        rlog.run_complete(
            status=status.value,
            files=len(changeset.files),
            rejected=sum(1 for o in outcomes if o.status == OutcomeStatus.REJECTED),
            errors=sum(1 for o in outcomes if o.status == OutcomeStatus.ERROR),
        )

        return HookRunResult(
            request_id=request.request_id,
            status=status,
            outcomes=outcomes,
            files_checked=len(changeset.files),
            duration_ms=duration_ms,
        )

    def _run_hook(self, hook: FileHook, hook_file: HookFile, rlog: RunLogger) -> HookOutcome:
        base = {
            "hook_name": hook.name,
            "path": hook_file.path,
            "change_type": hook_file.change_type,
        }

        if hook_file.is_deleted:
            rlog.file_skipped(hook_file.path, reason="deleted")
            return HookOutcome(status=OutcomeStatus.SKIPPED, **base)

        try:
            if hook_file.is_unmerged:
                raise ValueError(f"Unmerged path: {hook_file.path}")
            execution = hook.validate(hook_file.path, hook_file.content)
        except Exception as e:
            if self.raise_errors:
                raise
            rlog.hook_error(hook.name, hook_file.path, e)
            return HookOutcome(
                status=OutcomeStatus.ERROR,
                error=str(e),
                error_type=type(e).__name__,
                **base,
            )

        if execution.accepted:
            return HookOutcome(status=OutcomeStatus.ACCEPTED, execution=execution, **base)

        rlog.file_rejected(hook.name, hook_file.path, execution.reason or "")
        return HookOutcome(status=OutcomeStatus.REJECTED, execution=execution, **base)


def aggregate_status(outcomes: Sequence[HookOutcome]) -> RunStatus:
    """
    Combine per-file outcomes into one decision.

    Any rejection rejects the change. Otherwise any file that could not be
    evaluated makes the run an error; it never counts as acceptance.
    """
    statuses = {o.status for o in outcomes}
    if OutcomeStatus.REJECTED in statuses:
        return RunStatus.REJECTED
    if OutcomeStatus.ERROR in statuses:
        return RunStatus.ERROR
    return RunStatus.ACCEPTED


def get_runner(config=None) -> HookRunner:
    """
    Build a runner from a HookConfig (the bundled default if None).

    Raises:
        KeyError: If the config enables a hook that is not registered
    """
    import hookguard.hooks  # noqa: F401  (registers built-in hooks)
    from hookguard.config.loader import get_config
    from hookguard.hooks.registry import HookRegistry

    if config is None:
        config = get_config()

    hooks = [
        HookRegistry.create(entry.id, entry.options)
        for entry in config.get_enabled_hooks()
    ]
    return HookRunner(hooks, raise_errors=config.settings.raise_errors)


def run_hooks(
    changeset: HookChangeset,
    runner: Optional[HookRunner] = None,
) -> HookRunResult:
    """
    Convenience function for simple runs.

    Args:
        changeset: The changed files to check
        runner: Runner to use (default: built from the bundled config)

    Returns:
        HookRunResult
    """
    runner = runner or get_runner()
    return runner.run(HookRunRequest(changeset=changeset))
