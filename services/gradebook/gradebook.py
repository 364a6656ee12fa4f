"""Teacher gradebook over recorded submissions."""

import csv
import io
import logging
from typing import Dict, List, Optional

from config.models import Collections, GradebookRow, Profile, SubmissionRecord
from services.datastore import DataStore
from services.errors import AccessDenied
from services.session import SessionStore

logger = logging.getLogger(__name__)


class Gradebook:
    """
    Lists every submission with the submitting student's profile.

    Only teachers may read it.
    """

    CSV_HEADERS = ["student", "activity", "submitted_on", "drive_link"]

    def __init__(self, datastore: DataStore, session: SessionStore):
        self.datastore = datastore
        self.session = session

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------

    def list_submissions(self, search: str = "") -> List[GradebookRow]:
        """Submissions newest first, filtered on student or activity name."""
        self._require_teacher()

        rows = self.datastore.fetch_all(Collections.SUBMISSIONS)
        profiles = self._profiles_by_id()

        entries = []
        for row in rows:
            submission = SubmissionRecord.model_validate(row)
            entries.append(GradebookRow(submission=submission, student=profiles.get(submission.owner_id)))
        entries.sort(key=lambda e: e.submission.created_at, reverse=True)

        needle = search.strip().lower()
        if needle:
            entries = [
                e for e in entries
                if (e.student and needle in e.student.full_name.lower())
                or needle in e.submission.activity_name.lower()
            ]

        logger.info(f"Gradebook listed {len(entries)} submissions")
        return entries

    def export_csv(self, rows: Optional[List[GradebookRow]] = None) -> str:
        """Render gradebook rows (all submissions by default) as CSV text."""
        if rows is None:
            rows = self.list_submissions()
        else:
            self._require_teacher()

        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=self.CSV_HEADERS)
        writer.writeheader()
        for row in rows:
            writer.writerow({
                "student": row.student_name,
                "activity": row.submission.activity_name,
                "submitted_on": row.submission.created_at.date().isoformat(),
                "drive_link": row.submission.external_file_location,
            })
        return buffer.getvalue()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_teacher(self) -> None:
        profile = self.session.require_profile()
        if not self.session.is_teacher:
            raise AccessDenied(f"User {profile.id} is not a teacher.")

    def _profiles_by_id(self) -> Dict[str, Profile]:
        profiles = {}
        for row in self.datastore.fetch_all(Collections.PROFILES):
            profile = Profile.model_validate(row)
            profiles[profile.id] = profile
        return profiles
