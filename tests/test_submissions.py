import pytest

from config.models import Collections, SelectedFile, SubmissionRequest
from services.errors import PersistenceError, PreconditionViolation, TransferError, ValidationError
from services.submissions import RecorderStatus, SubmissionRecorder, canonical_name, extension_of
from conftest import FakeStorage, FlakyDataStore


def _pdf():
    return SelectedFile.from_bytes("my essay.final.pdf", b"%PDF-1.4 ...", "application/pdf")


# ----------------------------------------------------------------------
# Naming
# ----------------------------------------------------------------------

def test_canonical_name():
    assert canonical_name("Jane Doe", "Week 1 Reflection", "pdf") == "Jane_Doe_Week_1_Reflection.pdf"


def test_whitespace_runs_collapse_and_empty_extension_keeps_dot():
    assert canonical_name("A  B", "C", "") == "A_B_C."
    assert canonical_name("A\t\nB", "C D", "zip") == "A_B_C_D.zip"


def test_canonical_name_is_deterministic():
    assert canonical_name("Jane Doe", "Lab", "png") == canonical_name("Jane Doe", "Lab", "png")


@pytest.mark.parametrize("filename,ext", [
    ("report.pdf", "pdf"),
    ("archive.tar.gz", "gz"),
    ("README", ""),
    ("trailing.", ""),
])
def test_extension_of(filename, ext):
    assert extension_of(filename) == ext


# ----------------------------------------------------------------------
# Recorder
# ----------------------------------------------------------------------

def test_submit_stores_and_records(storage, datastore):
    recorder = SubmissionRecorder(storage, datastore)
    record = recorder.submit("student-1", "Jane Doe", "Week 1 Reflection", _pdf())

    name, data, mime = storage.stored[0]
    assert name == "Jane_Doe_Week_1_Reflection.pdf"
    assert data == b"%PDF-1.4 ..."
    assert mime == "application/pdf"

    assert record.owner_id == "student-1"
    assert record.activity_name == "Week 1 Reflection"
    assert record.external_file_location.endswith(name)
    assert recorder.status is RecorderStatus.SUCCEEDED

    stored = datastore.fetch_one(Collections.SUBMISSIONS, record.id)
    assert stored["user_id"] == "student-1"
    assert stored["drive_link"] == record.external_file_location


@pytest.mark.parametrize("display_name,activity,file,missing", [
    ("Jane Doe", "", _pdf(), "activity_name"),
    ("Jane Doe", "   ", _pdf(), "activity_name"),
    ("", "Lab", _pdf(), "owner_display_name"),
    ("Jane Doe", "Lab", None, "file"),
    ("Jane Doe", "Lab", SelectedFile.from_bytes("empty.txt", b""), "file"),
])
def test_invalid_input_makes_no_external_calls(storage, display_name, activity, file, missing):
    datastore = FlakyDataStore(failures=0)
    recorder = SubmissionRecorder(storage, datastore)

    with pytest.raises(ValidationError) as excinfo:
        recorder.submit("student-1", display_name, activity, file)

    assert missing in excinfo.value.missing_fields
    assert storage.stored == []
    assert datastore.insert_calls == 0
    assert recorder.status is RecorderStatus.IDLE


def test_transfer_failure_skips_persistence():
    datastore = FlakyDataStore(failures=0)
    recorder = SubmissionRecorder(FakeStorage(fail=True), datastore)

    with pytest.raises(TransferError):
        recorder.submit("student-1", "Jane Doe", "Lab", _pdf())

    assert datastore.insert_calls == 0
    assert recorder.status is RecorderStatus.FAILED
    assert isinstance(recorder.last_error, TransferError)


def test_persistence_failure_reports_orphaned_file_and_can_retry(storage):
    datastore = FlakyDataStore(failures=1)
    recorder = SubmissionRecorder(storage, datastore)

    with pytest.raises(PersistenceError) as excinfo:
        recorder.submit("student-1", "Jane Doe", "Lab", _pdf())

    location = excinfo.value.orphaned_location
    assert location == "memory://uploads/1/Jane_Doe_Lab.pdf"
    assert recorder.status is RecorderStatus.FAILED
    assert recorder.pending_record.external_file_location == location

    record = recorder.retry_record()
    assert record.external_file_location == location
    assert len(storage.stored) == 1
    assert datastore.fetch_one(Collections.SUBMISSIONS, record.id) is not None
    assert recorder.pending_record is None
    assert recorder.status is RecorderStatus.SUCCEEDED


def test_retry_without_pending_record_fails(storage, datastore):
    with pytest.raises(PreconditionViolation):
        SubmissionRecorder(storage, datastore).retry_record()


def test_submit_while_uploading_is_rejected(datastore):
    class ReentrantStorage(FakeStorage):
        def store(self, name, data, mime_type=None):
            recorder.submit("student-1", "Jane Doe", "Lab", _pdf())

    recorder = SubmissionRecorder(ReentrantStorage(), datastore)
    with pytest.raises(PreconditionViolation):
        recorder.submit("student-1", "Jane Doe", "Lab", _pdf())
    assert recorder.status is RecorderStatus.FAILED


def test_preview_name_placeholders(storage, datastore):
    recorder = SubmissionRecorder(storage, datastore)
    assert recorder.preview_name(None, "", None) == "userName_activityName.ext"
    assert recorder.preview_name("Jane Doe", "Week 1", "notes.docx") == "Jane_Doe_Week_1.docx"


def test_reset_returns_to_idle(storage, datastore):
    recorder = SubmissionRecorder(storage, datastore)
    recorder.submit("student-1", "Jane Doe", "Lab", _pdf())
    recorder.reset()
    assert recorder.status is RecorderStatus.IDLE


def test_submit_request_uses_form_fields(storage, datastore):
    recorder = SubmissionRecorder(storage, datastore)
    request = SubmissionRequest(owner_display_name="Jane Doe", activity_name="Lab", selected_file=_pdf())

    record = recorder.submit_request("student-1", request)

    assert storage.stored[0][0] == "Jane_Doe_Lab.pdf"
    assert datastore.fetch_one(Collections.SUBMISSIONS, record.id)["user_id"] == "student-1"


def test_submit_request_without_file_is_rejected(storage, datastore):
    recorder = SubmissionRecorder(storage, datastore)
    request = SubmissionRequest(owner_display_name="Jane Doe", activity_name="Lab")

    with pytest.raises(ValidationError) as exc:
        recorder.submit_request("student-1", request)

    assert exc.value.missing_fields == ["file"]
    assert storage.stored == []
