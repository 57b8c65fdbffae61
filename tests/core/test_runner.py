"""
Tests for the hook runner and verdict aggregation.
"""

import pytest

from hookguard.config.loader import parse_config
from hookguard.core.context import HookChangeset, HookRunRequest
from hookguard.core.contracts import FileHook
from hookguard.core.engine import HookRunner, aggregate_status, get_runner, run_hooks
from hookguard.hooks import ConflictMarkerHook
from hookguard.ir.enums import ChangedFileType, OutcomeStatus, RunStatus
from hookguard.ir.schema import HookExecution, HookOutcome


class AlwaysReject(FileHook):
    """Rejects every file without reading it."""

    @property
    def name(self) -> str:
        return "always_reject"

    def validate(self, path, content):
        return HookExecution.reject("nope", "long explanation")


def _run(runner, changeset):
    return runner.run(HookRunRequest(changeset=changeset))


class TestHookRunner:
    """Running hooks over a changeset."""

    def test_clean_changeset_accepted(self, memory_store):
        """All-clean files produce an accepted run."""
        changeset = memory_store.changeset({"src/app.py": ChangedFileType.MODIFIED})
        result = _run(HookRunner([ConflictMarkerHook()]), changeset)

        assert result.status == RunStatus.ACCEPTED
        assert result.accepted
        assert result.files_checked == 1
        assert [o.status for o in result.outcomes] == [OutcomeStatus.ACCEPTED]

    def test_any_rejection_rejects_change(self, memory_store):
        """One bad file rejects the whole change."""
        changeset = memory_store.changeset({
            "src/app.py": ChangedFileType.MODIFIED,
            "src/broken.py": ChangedFileType.ADDED,
            "docs/guide.md": ChangedFileType.MODIFIED,
            "assets/logo.png": ChangedFileType.ADDED,
        })
        result = _run(HookRunner([ConflictMarkerHook()]), changeset)

        assert result.status == RunStatus.REJECTED
        assert [o.path for o in result.rejections] == ["src/broken.py"]
        assert result.rejection_messages() == [
            "Conflict markers were found in file 'src/broken.py'"
        ]

    def test_deleted_files_skipped(self, exploding):
        """Deleted files are never read."""
        changeset = HookChangeset()
        changeset.add_file("gone.py", accessor=exploding, change_type=ChangedFileType.DELETED)
        result = _run(HookRunner([ConflictMarkerHook()]), changeset)

        assert result.status == RunStatus.ACCEPTED
        assert result.outcomes[0].status == OutcomeStatus.SKIPPED
        assert result.outcomes[0].execution is None

    def test_unmerged_file_is_error(self, exploding):
        """Unmerged paths are errors, even where the hook would skip the file."""
        changeset = HookChangeset()
        changeset.add_file("src/merge.py", accessor=exploding, change_type=ChangedFileType.UNMERGED)
        changeset.add_file("docs/merge.md", accessor=exploding, change_type=ChangedFileType.UNMERGED)
        result = _run(HookRunner([ConflictMarkerHook()]), changeset)

        assert result.status == RunStatus.ERROR
        assert [o.error for o in result.errors] == [
            "Unmerged path: src/merge.py",
            "Unmerged path: docs/merge.md",
        ]

    def test_missing_content_is_error_not_acceptance(self, memory_store):
        """A file whose content cannot be read is an error outcome."""
        changeset = memory_store.changeset({"src/missing.py": ChangedFileType.MODIFIED})
        result = _run(HookRunner([ConflictMarkerHook()]), changeset)

        assert result.status == RunStatus.ERROR
        assert not result.accepted
        error = result.errors[0]
        assert error.path == "src/missing.py"
        assert error.error_type == "FileNotFoundError"

    def test_rejection_wins_over_error(self, memory_store):
        """A known rejection is reported even when other files errored."""
        changeset = memory_store.changeset({
            "src/missing.py": ChangedFileType.MODIFIED,
            "src/broken.py": ChangedFileType.MODIFIED,
        })
        result = _run(HookRunner([ConflictMarkerHook()]), changeset)
        assert result.status == RunStatus.REJECTED
        assert len(result.errors) == 1

    def test_raise_errors_propagates(self, memory_store):
        """With raise_errors the accessor's exception escapes."""
        changeset = memory_store.changeset({"src/missing.py": ChangedFileType.MODIFIED})
        with pytest.raises(FileNotFoundError):
            _run(HookRunner([ConflictMarkerHook()], raise_errors=True), changeset)

    def test_content_shared_between_hooks(self, counting_accessor):
        """Several hooks on one file read its content once."""
        accessor = counting_accessor(b"clean\n")
        changeset = HookChangeset()
        changeset.add_file("a.txt", accessor=accessor)
        runner = HookRunner([ConflictMarkerHook(), ConflictMarkerHook()])
        result = _run(runner, changeset)

        assert len(result.outcomes) == 2
        assert accessor.calls == 1

    def test_outcome_per_hook_and_file(self, memory_store):
        """Outcomes are ordered file by file, hook by hook."""
        changeset = memory_store.changeset({
            "src/app.py": ChangedFileType.MODIFIED,
            "docs/guide.md": ChangedFileType.MODIFIED,
        })
        runner = HookRunner([ConflictMarkerHook(), AlwaysReject()])
        result = _run(runner, changeset)

        assert [(o.path, o.hook_name) for o in result.outcomes] == [
            ("src/app.py", "conflict_markers"),
            ("src/app.py", "always_reject"),
            ("docs/guide.md", "conflict_markers"),
            ("docs/guide.md", "always_reject"),
        ]
        assert result.outcomes[1].execution.rejection.long_description == "long explanation"

    def test_empty_changeset_accepted(self):
        """Nothing to check means nothing to reject."""
        result = _run(HookRunner([ConflictMarkerHook()]), HookChangeset())
        assert result.status == RunStatus.ACCEPTED
        assert result.outcomes == []

    def test_request_id_carried(self, memory_store):
        """The run result keeps the request ID."""
        changeset = memory_store.changeset({"src/app.py": ChangedFileType.MODIFIED})
        request = HookRunRequest(changeset=changeset, request_id="run-42")
        result = HookRunner([ConflictMarkerHook()]).run(request)
        assert result.request_id == "run-42"


class TestAggregateStatus:
    """Aggregation rules."""

    def _outcome(self, status):
        return HookOutcome(hook_name="h", path="p", status=status)

    def test_skipped_only_is_accepted(self):
        assert aggregate_status([self._outcome(OutcomeStatus.SKIPPED)]) == RunStatus.ACCEPTED

    def test_error_beats_accepted(self):
        outcomes = [self._outcome(OutcomeStatus.ACCEPTED), self._outcome(OutcomeStatus.ERROR)]
        assert aggregate_status(outcomes) == RunStatus.ERROR


class TestRunnerFromConfig:
    """Building runners from configuration."""

    def test_default_runner(self):
        """The bundled config enables the conflict-marker hook."""
        runner = get_runner()
        assert runner.hook_names == ["conflict_markers"]
        assert runner.raise_errors is False

    def test_disabled_hooks_left_out(self):
        config = parse_config({
            "hooks": [{"id": "conflict_markers", "enabled": False}],
        })
        assert get_runner(config).hook_names == []

    def test_unknown_hook_raises(self):
        config = parse_config({"hooks": [{"id": "no_such_hook"}]})
        with pytest.raises(KeyError):
            get_runner(config)

    def test_options_reach_hook(self, exploding):
        """Hook options from config are applied."""
        config = parse_config({
            "settings": {"raise_errors": True},
            "hooks": [{"id": "conflict_markers", "options": {"skip_suffixes": [".txt"]}}],
        })
        runner = get_runner(config)
        assert runner.raise_errors is True

        changeset = HookChangeset()
        changeset.add_file("notes.txt", accessor=exploding)
        assert run_hooks(changeset, runner).status == RunStatus.ACCEPTED
