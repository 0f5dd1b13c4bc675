"""Migration job - coordinates CSV preparation and the record store phases."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .constants import (
    GROUP_CSV_FILENAME,
    ID_FIELD,
    USER_AND_GROUP_FILENAME,
    USER_CSV_FILENAME,
)
from .context import JobContext
from .coordinator import CSVValidationRepairCoordinator
from .errors import JobAbortedError
from .models.config import JobConfig
from .models.job import JobStatus, ValidationOutcome
from .phases import JobPhaseRunner
from .services.archiver import SourceFileArchiver
from .services.csv_io import merge_csv_files
from .services.prompt import AbortPrompt
from .services.reporter import IssueReporter
from .services.value_mapping import ValueMappingLoader
from .stores.base import RecordStore
from .tasks.base import BaseTask
from .tasks.csv_task import CSVObjectTask

logger = logging.getLogger(__name__)


class MigrationJob:
    """
    Runs one migration job.

    Handles:
    - Loading the value mapping
    - Merging the User and Group exports
    - Archiving the original CSV files
    - Validating and repairing the CSV files of all tasks
    - Counting, deleting and querying target records per task
    """

    def __init__(
        self,
        config: JobConfig,
        tasks: Optional[List[BaseTask]] = None,
        prompt: Optional[AbortPrompt] = None
    ):
        """
        Initialize the job.

        Args:
            config: Job configuration
            tasks: Tasks in migration order
            prompt: Abort gate; defaults to the configured prompt policy
        """
        self.config = config
        self.base_path = Path(config.base_path)
        self.tasks: List[BaseTask] = list(tasks or [])
        self.context = JobContext(base_path=self.base_path)

        self.prompt = prompt or AbortPrompt(interactive=config.prompt_on_issues_in_csv_files)
        self.reporter = IssueReporter(self.base_path)
        self.coordinator = CSVValidationRepairCoordinator(self.context, self.prompt, self.reporter)
        self.phases = JobPhaseRunner(self.tasks)

        self.status = JobStatus.PENDING
        self.validation_outcome: Optional[ValidationOutcome] = None
        self.records_deleted = False
        self.started_at: Optional[datetime] = None
        self.completed_at: Optional[datetime] = None

    @classmethod
    def from_config(cls, config: JobConfig, store: Optional[RecordStore] = None, **kwargs) -> "MigrationJob":
        """Create a job with one CSV task per configured object."""
        tasks = [CSVObjectTask(definition, config.base_path, store) for definition in config.objects]
        return cls(config, tasks, **kwargs)

    @property
    def issues(self):
        return self.context.issues

    @property
    def cache(self):
        return self.context.cache

    @property
    def value_mapping(self):
        return self.context.value_mapping

    def add_task(self, task: BaseTask) -> None:
        """Register a task; tasks run in registration order."""
        self.tasks.append(task)

    def get_task_by_object_name(self, object_name: str) -> Optional[BaseTask]:
        for task in self.tasks:
            if task.object_name == object_name:
                return task
        return None

    def run(self, validate_only: bool = False) -> JobStatus:
        """
        Run the complete job.

        Args:
            validate_only: Stop after the CSV files are validated and repaired

        Returns:
            Final job status

        Raises:
            JobAbortedError: if the operator aborts
        """
        self.started_at = datetime.now()

        try:
            logger.info("=== PHASE 1: PREPARE CSV FILES ===")
            self.status = JobStatus.PREPARING
            self.load_csv_value_mapping_file()
            if self.config.merge_user_group:
                self.merge_user_group_csv_files()
            self.copy_csv_files_to_source_subdir()

            logger.info("=== PHASE 2: VALIDATE AND REPAIR CSV FILES ===")
            self.status = JobStatus.VALIDATING
            self.validate_and_repair_source_csv_files()
            self.clear_cached_csv_data()

            if not validate_only:
                logger.info("=== PHASE 3: COUNT RECORDS ===")
                self.status = JobStatus.COUNTING
                self.get_total_records_count()

                logger.info("=== PHASE 4: DELETE OLD RECORDS ===")
                self.status = JobStatus.DELETING
                self.records_deleted = self.delete_old_records()

                logger.info("=== PHASE 5: QUERY RECORDS ===")
                self.status = JobStatus.QUERYING
                self.query_records()

            self.status = JobStatus.COMPLETED
            logger.info("=== JOB COMPLETED ===")

        except JobAbortedError:
            self.status = JobStatus.ABORTED
            logger.error("Job aborted by the user")
            raise

        except Exception as e:
            logger.error(f"Job failed during {self.status.value}: {e}")
            self.status = JobStatus.FAILED
            raise

        finally:
            self.completed_at = datetime.now()

        return self.status

    # ---------- CSV preparation ----------

    def load_csv_value_mapping_file(self) -> None:
        """Load the value mapping definition file into memory."""
        ValueMappingLoader(self.base_path).load(into=self.context.value_mapping)

    def merge_user_group_csv_files(self) -> int:
        """Merge User.csv and Group.csv into a single file."""
        return merge_csv_files(
            self.base_path / USER_CSV_FILENAME,
            self.base_path / GROUP_CSV_FILENAME,
            self.base_path / (USER_AND_GROUP_FILENAME + ".csv"),
            True,
            ID_FIELD,
            "Name",
        )

    def copy_csv_files_to_source_subdir(self) -> None:
        """Back up the original CSV files before they get repaired."""
        count = SourceFileArchiver().archive_all(self.tasks)
        logger.info(f"Archived {count} source CSV file(s)")

    def validate_and_repair_source_csv_files(self) -> ValidationOutcome:
        """Check and repair the CSV files of all tasks."""
        self.validation_outcome = self.coordinator.run(self.tasks)
        return self.validation_outcome

    # ---------- record store phases ----------

    def get_total_records_count(self) -> None:
        self.phases.count_all()

    def delete_old_records(self) -> bool:
        return self.phases.delete_old_records()

    def query_records(self) -> None:
        self.phases.query_all()

    # ---------- files ----------

    def save_csv_file(self, file_name: str, data: Iterable[Any]) -> Path:
        """Save rows to a CSV file in the job directory."""
        return self.reporter.save_csv(file_name, data)

    def save_cached_csv_data_files(self) -> int:
        """Write every changed cached CSV file to disk."""
        return self.reporter.flush_dirty(self.context.cache)

    def clear_cached_csv_data(self) -> None:
        self.context.cache.clear()
