"""Test script for UploadController - selection, preview ownership and upload"""

from vidseek.api.errors import BackendError, TransportError
from vidseek.models import Phase, UploadResult


def test_upload_without_file_is_rejected(app):
    """Test upload with no selection shows a message and sends nothing"""
    assert app.upload_controller.upload() is False
    assert app.session.upload_status == "Please select a video file first."
    assert app.client.calls == []


def test_select_file_opens_preview(app, tmp_path):
    """Test selecting a file opens a preview and refreshes the UI"""
    preview = app.upload_controller.select_file(tmp_path / "talk.mp4")

    assert app.session.preview is preview
    assert app.session.selected_file == tmp_path / "talk.mp4"
    assert preview.release_count == 0
    assert app.refresh_count == 1


def test_reselect_releases_previous_preview_once(app, tmp_path):
    """Test replacing the file releases the old preview exactly once"""
    first = app.upload_controller.select_file(tmp_path / "a.mp4")
    second = app.upload_controller.select_file(tmp_path / "b.mp4")
    third = app.upload_controller.select_file(tmp_path / "c.mp4")

    assert first.release_count == 1
    assert second.release_count == 1
    assert third.release_count == 0


def test_release_preview_on_teardown(app, tmp_path):
    """Test teardown releases the current preview, and only once"""
    preview = app.upload_controller.select_file(tmp_path / "a.mp4")
    app.upload_controller.release_preview()
    app.upload_controller.release_preview()
    assert preview.release_count == 1


def test_upload_success(app, tmp_path):
    """Test a successful upload activates the returned video"""
    app.client.upload_reply = UploadResult("v1", 12, "A talk about search.")
    app.upload_controller.select_file(tmp_path / "talk.mp4")

    assert app.upload_controller.upload() is True
    assert app.client.calls == [("upload", tmp_path / "talk.mp4")]
    assert app.session.active_video_id == "v1"
    assert app.session.summary == "A talk about search."
    assert "12" in app.session.upload_status


def test_upload_backend_error(app, tmp_path, backend_error):
    """Test a backend rejection shows its detail and leaves no active video"""
    app.client.upload_reply = backend_error
    app.upload_controller.select_file(tmp_path / "talk.mp4")
    app.upload_controller.upload()

    assert app.session.upload.phase is Phase.FAILED
    assert app.session.active_video_id is None
    assert app.session.upload_status == "Upload failed: Unsupported video format"
    assert app.session.can_upload()


def test_upload_transport_error(app, tmp_path, transport_error):
    """Test a connection failure is reported like a backend failure"""
    app.client.upload_reply = transport_error
    app.upload_controller.select_file(tmp_path / "talk.mp4")
    app.upload_controller.upload()

    assert app.session.upload_status == "Upload failed: Connection refused"
    assert app.session.active_video_id is None


def test_unexpected_worker_error_reenables_upload(app, tmp_path):
    """Test a non-client exception still ends the upload as FAILED"""
    app.client.upload_reply = RuntimeError("disk on fire")
    app.upload_controller.select_file(tmp_path / "talk.mp4")
    app.upload_controller.upload()

    assert app.session.upload.phase is Phase.FAILED
    assert app.session.upload_status == "Upload failed: disk on fire"


def test_upload_ignored_while_in_flight(app, tmp_path):
    """Test a second upload trigger while processing issues no request"""
    app.dispatcher.hold = True
    app.upload_controller.select_file(tmp_path / "talk.mp4")

    assert app.upload_controller.upload() is True
    assert app.session.is_uploading
    assert app.upload_controller.upload() is False
    assert len(app.dispatcher.pending) == 1


def test_upload_ignored_after_success(uploaded_app):
    """Test the same file is not uploaded twice"""
    assert uploaded_app.upload_controller.upload() is False
    assert uploaded_app.client.count("upload") == 1


def test_retry_after_failure(app, tmp_path):
    """Test a failed upload can be retried for the same file"""
    app.client.upload_reply = BackendError(500, "Whisper crashed")
    app.upload_controller.select_file(tmp_path / "talk.mp4")
    app.upload_controller.upload()

    app.client.upload_reply = UploadResult("v2", 4)
    assert app.upload_controller.upload() is True
    assert app.session.active_video_id == "v2"


def test_stale_upload_is_discarded(app, tmp_path):
    """Test an upload that finishes after reselection changes nothing"""
    app.dispatcher.hold = True
    app.upload_controller.select_file(tmp_path / "a.mp4")
    app.upload_controller.upload()
    app.upload_controller.select_file(tmp_path / "b.mp4")

    app.dispatcher.flush()

    assert app.session.active_video_id is None
    assert app.session.upload.phase is Phase.IDLE
    assert app.session.upload_status == ""


def test_stale_upload_failure_is_discarded(app, tmp_path, transport_error):
    """Test a late failure for the old file does not show an error"""
    app.dispatcher.hold = True
    app.client.upload_reply = transport_error
    app.upload_controller.select_file(tmp_path / "a.mp4")
    app.upload_controller.upload()
    app.upload_controller.select_file(tmp_path / "b.mp4")

    app.dispatcher.flush()

    assert app.session.upload_status == ""
    assert app.session.can_upload()
