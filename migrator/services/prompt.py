"""Abort-or-continue decision point."""

import logging
from typing import Callable, Optional

from ..errors import JobAbortedError

logger = logging.getLogger(__name__)

YES_ANSWERS = ("y", "yes")


class AbortPrompt:
    """
    Lets the operator stop or continue a job when issues are found.

    In non-interactive mode the job always continues.
    """

    def __init__(self, interactive: bool = True, input_func: Optional[Callable[[str], str]] = None):
        self.interactive = interactive
        self._input = input_func

    def prompt_or_report(
        self,
        issue_count: int,
        report_file_name: str,
        on_continue: Callable[[], None],
        on_abort: Optional[Callable[[], None]] = None
    ) -> None:
        """
        Warn about the issues and ask whether to continue.

        Args:
            issue_count: Number of issues found
            report_file_name: Report file the issues go to
            on_continue: Called when the job continues
            on_abort: Called before aborting

        Raises:
            JobAbortedError: if the operator aborts
        """
        logger.warning(f"{issue_count} issue(s) found during CSV validation. See {report_file_name} for details.")

        if self.interactive:
            ask = self._input or input
            try:
                answer = ask("Continue the job? (y/n): ").strip().lower()
            except EOFError:
                # No operator attached (closed stdin)
                answer = ""
            if answer not in YES_ANSWERS:
                if on_abort:
                    on_abort()
                raise JobAbortedError("Job aborted by the user")

        on_continue()
