"""Two-pass CSV validation and repair across all tasks of a job."""

import logging
from typing import List

from .constants import CSV_ISSUES_ERRORS_FILENAME
from .context import JobContext
from .models.issue import ISSUE_COLUMNS
from .models.job import ValidationOutcome
from .services.prompt import AbortPrompt
from .services.reporter import IssueReporter
from .tasks.base import BaseTask

logger = logging.getLogger(__name__)


class CSVValidationRepairCoordinator:
    """
    Validates and repairs the CSV files of every task.

    Pass 1 checks the structure of every file; pass 2 repairs content
    through the shared row cache. Every task finishes pass 1 before any
    task starts pass 2, so the operator decides on abort before a single
    row is changed.

    The operator is asked at most once per run. Issues found after the
    prompt fired are only written to the report.
    """

    def __init__(
        self,
        context: JobContext,
        prompt: AbortPrompt,
        reporter: IssueReporter,
        report_file_name: str = CSV_ISSUES_ERRORS_FILENAME
    ):
        self.context = context
        self.prompt = prompt
        self.reporter = reporter
        self.report_file_name = report_file_name
        self.prompted = False

    def run(self, tasks: List[BaseTask]) -> ValidationOutcome:
        """
        Validate, repair and save the CSV files of the tasks.

        Raises:
            JobAbortedError: if the operator aborts at the prompt
        """
        issues = self.context.issues

        # Pass 1: structure
        for task in tasks:
            issues.extend(task.validate_csv(self.context))

        if issues:
            self._prompt()
            self.prompted = True

        # Pass 2: content
        for task in tasks:
            issues.extend(task.repair_csv(self.context))

        written = self.reporter.flush_dirty(self.context.cache)
        logger.info(f"{written} CSV file(s) were updated")

        if not issues:
            logger.info("No issues found during CSV validation")
            return ValidationOutcome.NO_ISSUES

        if self.prompted:
            self.save_issues_report()
            logger.warning(
                f"{len(issues)} issue(s) found during CSV validation. "
                f"See {self.report_file_name} for details."
            )
            return ValidationOutcome.REPORTED

        self._prompt()
        self.prompted = True
        return ValidationOutcome.CONTINUED

    def save_issues_report(self) -> None:
        """Write every issue collected so far to the report file."""
        self.reporter.save_csv(self.report_file_name, self.context.issues, ISSUE_COLUMNS)

    def _prompt(self) -> None:
        self.prompt.prompt_or_report(
            len(self.context.issues),
            self.report_file_name,
            on_continue=self.save_issues_report,
            on_abort=self.save_issues_report,
        )
