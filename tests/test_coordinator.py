import pytest

from migrator.context import JobContext
from migrator.coordinator import CSVValidationRepairCoordinator
from migrator.errors import JobAbortedError
from migrator.models.issue import CSVIssue
from migrator.models.job import ValidationOutcome
from migrator.services.reporter import IssueReporter
from tests.helpers import FakeTask, read_csv, write_csv


class RecordingPrompt:
    def __init__(self, log, answer=True):
        self.log = log
        self.answer = answer
        self.calls = 0

    def prompt_or_report(self, issue_count, report_file_name, on_continue, on_abort=None):
        self.calls += 1
        self.log.append(("prompt", issue_count))
        if not self.answer:
            if on_abort:
                on_abort()
            raise JobAbortedError("aborted")
        on_continue()


def make_coordinator(tmp_path, log, answer=True):
    context = JobContext(base_path=tmp_path)
    prompt = RecordingPrompt(log, answer)
    return CSVValidationRepairCoordinator(context, prompt, IssueReporter(tmp_path)), prompt


def test_prompt_fires_between_passes(tmp_path, call_log):
    coordinator, prompt = make_coordinator(tmp_path, call_log)
    tasks = [
        FakeTask("A", call_log, validate_issues=[CSVIssue(error="bad header")]),
        FakeTask("B", call_log, repair_issues=[CSVIssue(error="missing parent")]),
    ]

    outcome = coordinator.run(tasks)

    assert call_log == [
        ("validate", "A"), ("validate", "B"),
        ("prompt", 1),
        ("repair", "A"), ("repair", "B"),
    ]
    assert prompt.calls == 1
    assert outcome == ValidationOutcome.REPORTED
    errors = [row["Error"] for row in read_csv(tmp_path / "CSVIssuesReport.csv")]
    assert errors == ["bad header", "missing parent"]


def test_no_issues_writes_no_report(tmp_path, call_log):
    coordinator, prompt = make_coordinator(tmp_path, call_log)

    outcome = coordinator.run([FakeTask("A", call_log), FakeTask("B", call_log)])

    assert outcome == ValidationOutcome.NO_ISSUES
    assert prompt.calls == 0
    assert not (tmp_path / "CSVIssuesReport.csv").exists()


def test_repair_issues_only_prompt_after_flush(tmp_path, call_log):
    coordinator, prompt = make_coordinator(tmp_path, call_log)
    tasks = [FakeTask("A", call_log, repair_issues=[CSVIssue(error="unmapped value")])]

    outcome = coordinator.run(tasks)

    assert call_log == [("validate", "A"), ("repair", "A"), ("prompt", 1)]
    assert outcome == ValidationOutcome.CONTINUED
    assert coordinator.prompted
    assert len(read_csv(tmp_path / "CSVIssuesReport.csv")) == 1


def test_abort_stops_before_repair(tmp_path, call_log):
    coordinator, prompt = make_coordinator(tmp_path, call_log, answer=False)
    tasks = [
        FakeTask("A", call_log, validate_issues=[CSVIssue(error="bad header")]),
        FakeTask("B", call_log),
    ]

    with pytest.raises(JobAbortedError):
        coordinator.run(tasks)

    assert ("repair", "A") not in call_log
    assert ("repair", "B") not in call_log
    assert len(read_csv(tmp_path / "CSVIssuesReport.csv")) == 1


def test_issues_keep_task_order(tmp_path, call_log):
    coordinator, _ = make_coordinator(tmp_path, call_log)
    tasks = [
        FakeTask("A", call_log, validate_issues=[CSVIssue(error="a1"), CSVIssue(error="a2")],
                 repair_issues=[CSVIssue(error="a3")]),
        FakeTask("B", call_log, validate_issues=[CSVIssue(error="b1")]),
    ]

    coordinator.run(tasks)

    assert [i.error for i in coordinator.context.issues] == ["a1", "a2", "b1", "a3"]


class DirtyingTask(FakeTask):
    def repair_csv(self, context):
        table = context.cache.load_table(self.csv_filename)
        table["1"]["Name"] = "Repaired"
        context.cache.mark_dirty(self.csv_filename)
        return super().repair_csv(context)


class ReadOnlyTask(FakeTask):
    def repair_csv(self, context):
        context.cache.load_table(self.csv_filename)["1"]["Name"] = "Not saved"
        return super().repair_csv(context)


def test_only_dirty_files_are_flushed(tmp_path, call_log):
    dirty = write_csv(tmp_path / "A.csv", [{"Id": "1", "Name": "Old"}])
    clean = write_csv(tmp_path / "B.csv", [{"Id": "1", "Name": "Old"}])
    coordinator, _ = make_coordinator(tmp_path, call_log)

    coordinator.run([
        DirtyingTask("A", call_log, csv_filename=str(dirty)),
        ReadOnlyTask("B", call_log, csv_filename=str(clean)),
    ])

    assert read_csv(dirty)[0]["Name"] == "Repaired"
    assert read_csv(clean)[0]["Name"] == "Old"
