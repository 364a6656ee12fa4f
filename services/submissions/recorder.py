"""Submission recorder: validate, name, upload, then record the submission."""

import logging
from enum import Enum
from typing import Optional

from config.models import Collections, SelectedFile, SubmissionRecord, SubmissionRequest
from services.datastore import DataStore
from services.errors import PersistenceError, PreconditionViolation, ValidationError
from services.storage import ObjectStorage
from .namer import canonical_name, extension_of

logger = logging.getLogger(__name__)


class RecorderStatus(str, Enum):
    """Named states of the recorder."""
    IDLE = "idle"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SubmissionRecorder:
    """
    Orchestrates one submit operation.

    Steps:
      1. Validate that owner name, activity name and file are present
      2. Derive the canonical file name
      3. Transfer the bytes to object storage (TransferError on failure)
      4. Insert a SubmissionRecord pointing at the stored file
         (PersistenceError on failure)

    Storage and record insert are not atomic. When step 4 fails the stored
    file is orphaned; the error carries its location and `retry_record()`
    re-issues only the insert.
    """

    def __init__(self, storage: ObjectStorage, datastore: DataStore):
        self.storage = storage
        self.datastore = datastore
        self.status = RecorderStatus.IDLE
        self.last_error: Optional[Exception] = None
        self.last_record: Optional[SubmissionRecord] = None
        self.pending_record: Optional[SubmissionRecord] = None

    @property
    def is_busy(self) -> bool:
        return self.status is RecorderStatus.UPLOADING

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def preview_name(
        self,
        owner_display_name: Optional[str],
        activity_name: Optional[str],
        filename: Optional[str],
    ) -> str:
        """Auto-naming preview with placeholders for parts not yet entered."""
        return canonical_name(
            owner_display_name or "userName",
            activity_name or "activityName",
            (extension_of(filename) if filename else "") or "ext",
        )

    def submit(
        self,
        owner_id: str,
        owner_display_name: Optional[str],
        activity_name: Optional[str],
        file: Optional[SelectedFile],
    ) -> SubmissionRecord:
        if self.is_busy:
            raise PreconditionViolation("A submission is already in progress.")

        self._validate(owner_display_name, activity_name, file)

        name = canonical_name(owner_display_name, activity_name, extension_of(file.name))
        logger.info(f"Submitting '{activity_name}' for {owner_id} as {name}")

        self.status = RecorderStatus.UPLOADING
        self.last_error = None
        self.pending_record = None
        try:
            location = self.storage.store(name, file.content, file.mime_type)
            record = SubmissionRecord(
                owner_id=owner_id,
                activity_name=activity_name,
                external_file_location=location,
            )
            return self._persist(record)
        except Exception as e:
            self.status = RecorderStatus.FAILED
            self.last_error = e
            raise

    def submit_request(self, owner_id: str, request: SubmissionRequest) -> SubmissionRecord:
        """Submit from a form-shaped request."""
        return self.submit(owner_id, request.owner_display_name, request.activity_name, request.selected_file)

    def retry_record(self) -> SubmissionRecord:
        """Insert the record of a submission whose file is already stored."""
        if self.pending_record is None:
            raise PreconditionViolation("No stored submission is awaiting its record.")
        if self.is_busy:
            raise PreconditionViolation("A submission is already in progress.")

        self.status = RecorderStatus.UPLOADING
        try:
            return self._persist(self.pending_record)
        except PersistenceError as e:
            self.status = RecorderStatus.FAILED
            self.last_error = e
            raise

    def reset(self) -> None:
        """Back to IDLE for another upload."""
        if self.is_busy:
            raise PreconditionViolation("Cannot reset while a submission is in progress.")
        self.status = RecorderStatus.IDLE
        self.last_error = None
        self.pending_record = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _validate(self, owner_display_name, activity_name, file) -> None:
        missing = []
        if not owner_display_name or not owner_display_name.strip():
            missing.append("owner_display_name")
        if not activity_name or not activity_name.strip():
            missing.append("activity_name")
        if file is None or not file.name or not file.content:
            missing.append("file")

        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", missing)

    def _persist(self, record: SubmissionRecord) -> SubmissionRecord:
        try:
            self.datastore.insert(Collections.SUBMISSIONS, record.to_record())
        except PersistenceError as e:
            self.pending_record = record
            location = record.external_file_location
            logger.error(f"Stored file {location} has no submission record: {e}")
            raise PersistenceError(str(e), orphaned_location=location) from e

        self.pending_record = None
        self.last_record = record
        self.status = RecorderStatus.SUCCEEDED
        logger.info(f"Recorded submission {record.id} → {record.external_file_location}")
        return record
