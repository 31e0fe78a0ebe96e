from __future__ import annotations

from result import Err, Ok, Result

from awstui.config.loader import load_settings
from awstui.config.store import SettingsStore
from awstui.models.enums import FormMode
from awstui.models.records import HostedZone, Route53Record
from awstui.ui.view import View
from awstui.ui.views.route53 import Route53RecordForm
from awstui.ui.views.s3 import ChangeDirectoryForm, S3DownloadForm, S3UploadForm
from tests.fs_mock import MemoryFileSystem

ZONE = HostedZone(id="Z1", name="example.com.")


class FakeNav:
    def __init__(self) -> None:
        self.errors: list[str] = []
        self.notices: list[str] = []
        self.closed = 0
        self.pushed: list[View] = []

    def push(self, view: View) -> None:
        self.pushed.append(view)

    def close(self) -> None:
        self.closed += 1

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def notify(self, message: str, *, severity: str = "information") -> None:
        self.notices.append(message)


class FakeRoute53:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Route53Record]] = []

    def create_record(self, zone_id: str, record: Route53Record) -> Result[None, str]:
        self.calls.append(("create", record))
        return Ok(None)

    def update_record(self, zone_id: str, old: Route53Record, new: Route53Record) -> Result[None, str]:
        self.calls.append(("update", new))
        return Ok(None)

    def delete_record(self, zone_id: str, record: Route53Record) -> Result[None, str]:
        self.calls.append(("delete", record))
        return Err("ChangeResourceRecordSets failed: denied")


class FakeS3:
    def __init__(self) -> None:
        self.uploads: list[tuple[str, str, str, str, str]] = []
        self.downloads: list[tuple[str, str, str]] = []

    def upload_object(self, bucket: str, key: str, path: str, content_type: str, acl: str) -> Result[str, str]:
        self.uploads.append((bucket, key, path, content_type, acl))
        return Ok(key)

    def download_object(self, bucket: str, key: str, destination: str) -> Result[str, str]:
        self.downloads.append((bucket, key, destination))
        return Ok(destination)


def test_directory_picker_rejects_then_accepts() -> None:
    fs = MemoryFileSystem(cwd="/work")
    store = SettingsStore(fs=fs)
    nav = FakeNav()
    form = ChangeDirectoryForm(store, nav)

    form.submit_form({"directory": "~/nonexistent"})

    assert nav.errors and nav.errors[0].startswith("Directory not found")
    assert nav.closed == 0
    assert store.local_directory() == "/work"

    form.submit_form({"directory": "~"})

    assert nav.closed == 1
    assert load_settings(fs=fs).unwrap().local_directory == "/mock/home"


def test_directory_form_prefills_current_directory() -> None:
    store = SettingsStore(fs=MemoryFileSystem(cwd="/work"))
    fields = ChangeDirectoryForm(store, FakeNav()).fields()
    assert [(field.name, field.value) for field in fields] == [("directory", "/work")]


def test_create_record_runs_completion_then_closes() -> None:
    repo = FakeRoute53()
    nav = FakeNav()
    done: list[int] = []
    form = Route53RecordForm(repo, ZONE, FormMode.CREATE, None, nav, on_complete=lambda: done.append(nav.closed))  # type: ignore[arg-type]

    form.submit_form({"name": "www", "type": "A", "ttl": "300", "value": "1.2.3.4"})

    assert nav.errors == []
    assert done == [0]
    assert nav.closed == 1
    action, record = repo.calls[0]
    assert action == "create"
    assert record.name == "www.example.com."


def test_invalid_ttl_keeps_form_open() -> None:
    repo = FakeRoute53()
    nav = FakeNav()
    form = Route53RecordForm(repo, ZONE, FormMode.CREATE, None, nav)  # type: ignore[arg-type]

    form.submit_form({"name": "www", "type": "A", "ttl": "abc", "value": "1.2.3.4"})

    assert nav.errors == ["Invalid TTL value"]
    assert nav.closed == 0
    assert repo.calls == []


def test_update_prefills_from_record() -> None:
    record = Route53Record(name="www.example.com.", type="CNAME", ttl=60, values=["a.example.net"])
    form = Route53RecordForm(FakeRoute53(), ZONE, FormMode.UPDATE, record, FakeNav())  # type: ignore[arg-type]
    values = {field.name: field.value for field in form.fields()}
    assert values == {"name": "www", "type": "CNAME", "ttl": "60", "value": "a.example.net"}


def test_failed_delete_shows_error() -> None:
    record = Route53Record(name="www.example.com.", type="A", ttl=60, values=["1.2.3.4"])
    nav = FakeNav()
    form = Route53RecordForm(FakeRoute53(), ZONE, FormMode.DELETE, record, nav)  # type: ignore[arg-type]

    assert all(field.kind == "text" for field in form.fields())
    form.submit_form()

    assert nav.errors == ["ChangeResourceRecordSets failed: denied"]
    assert nav.closed == 0


def test_upload_form_defaults() -> None:
    repo = FakeS3()
    nav = FakeNav()
    form = S3UploadForm(repo, "bucket", "logs/", "/home/me/app.json", nav)  # type: ignore[arg-type]

    form.submit_form()

    assert repo.uploads == [("bucket", "logs/app.json", "/home/me/app.json", "application/json", "private")]
    assert nav.closed == 1


def test_download_form_joins_directory_and_name() -> None:
    repo = FakeS3()
    nav = FakeNav()
    form = S3DownloadForm(repo, "bucket", "logs/app.json", "/home/me", nav)  # type: ignore[arg-type]

    form.submit_form({"key": "logs/app.json", "directory": "/home/me", "filename": "copy.json"})

    assert repo.downloads == [("bucket", "logs/app.json", "/home/me/copy.json")]
    assert nav.notices == ["Downloaded to /home/me/copy.json"]


def test_download_requires_file_name() -> None:
    nav = FakeNav()
    form = S3DownloadForm(FakeS3(), "bucket", "a.txt", "/home/me", nav)  # type: ignore[arg-type]
    form.submit_form({"key": "a.txt", "directory": "/home/me", "filename": " "})
    assert nav.errors == ["File name is required"]
