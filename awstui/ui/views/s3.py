from __future__ import annotations

import logging
import posixpath
from typing import Callable, override

from result import Err, Ok, Result
from textual.widget import Widget
from textual.widgets.tree import TreeNode

from awstui.config.store import SettingsStore
from awstui.models.keys import KeyAction
from awstui.models.records import S3Bucket, S3CorsRule
from awstui.repo.s3 import S3Repo
from awstui.services.filtering import Row, make_rows
from awstui.services.formatting import format_time
from awstui.services.fs import DEFAULT_FS, FileSystem
from awstui.services.transfer import (
    CANNED_ACLS,
    default_content_type,
    download_destination,
    local_files,
    parent_prefix,
    upload_key,
)
from awstui.ui.forms import Field, FormView
from awstui.ui.tree import NavTree
from awstui.ui.view import Navigator, View
from awstui.ui.views.common import DocumentView, KeyValueView, TableView

logger = logging.getLogger(__name__)

SERVICE = "S3"


class S3Buckets(TableView):
    service = SERVICE
    headers = ("NAME", "CREATED")

    def __init__(self, repo: S3Repo, settings: SettingsStore, nav: Navigator) -> None:
        super().__init__(nav)
        self.repo = repo
        self.settings = settings

    @property
    @override
    def labels(self) -> list[str]:
        return ["Buckets"]

    @override
    def key_actions(self) -> list[KeyAction]:
        return [
            *super().key_actions(),
            KeyAction("enter", "Objects", lambda: None),
            KeyAction("p", "Policy", self.show_policy),
            KeyAction("T", "Tags", self.show_tags),
            KeyAction("c", "CORS Rules", self.show_cors),
        ]

    @override
    def fetch(self) -> Result[list[Row], str]:
        def rows(buckets: list[S3Bucket]) -> list[Row]:
            return make_rows([[b.name, format_time(b.created)] for b in buckets], buckets)

        return self.repo.list_buckets().map(rows)

    @override
    def on_select(self, row: Row) -> None:
        bucket: S3Bucket = row.item
        self.nav.push(S3Objects(self.repo, bucket.name, self.settings, self.nav))

    def show_policy(self) -> None:
        bucket: S3Bucket | None = self.selected_item()
        if bucket is None:
            return
        self.nav.push(
            DocumentView(self.nav, SERVICE, ["Buckets", bucket.name, "Policy"], lambda: self.repo.bucket_policy(bucket.name))
        )

    def show_tags(self) -> None:
        bucket: S3Bucket | None = self.selected_item()
        if bucket is None:
            return
        self.nav.push(
            KeyValueView(self.nav, SERVICE, ["Buckets", bucket.name, "Tags"], lambda: self.repo.bucket_tags(bucket.name))
        )

    def show_cors(self) -> None:
        bucket: S3Bucket | None = self.selected_item()
        if bucket is not None:
            self.nav.push(S3CorsRules(self.repo, bucket.name, self.nav))


def cors_row(rule: S3CorsRule) -> list[str]:
    return [
        rule.id,
        ", ".join(rule.allowed_methods),
        ", ".join(rule.allowed_origins),
        ", ".join(rule.allowed_headers),
        ", ".join(rule.expose_headers),
        "" if rule.max_age is None else str(rule.max_age),
    ]


class S3CorsRules(TableView):
    service = SERVICE
    headers = ("ID", "METHODS", "ORIGINS", "ALLOWED HEADERS", "EXPOSED HEADERS", "MAX AGE")

    def __init__(self, repo: S3Repo, bucket: str, nav: Navigator) -> None:
        super().__init__(nav)
        self.repo = repo
        self.bucket = bucket

    @property
    @override
    def labels(self) -> list[str]:
        return ["Buckets", self.bucket, "CORS Rules"]

    @override
    def fetch(self) -> Result[list[Row], str]:
        def rows(rules: list[S3CorsRule]) -> list[Row]:
            return make_rows([cors_row(rule) for rule in rules], rules)

        return self.repo.bucket_cors(self.bucket).map(rows)


class S3Objects(View):
    """One bucket as a lazily loaded tree of prefixes and keys."""

    service = SERVICE

    def __init__(
        self,
        repo: S3Repo,
        bucket: str,
        settings: SettingsStore,
        nav: Navigator,
        fs: FileSystem = DEFAULT_FS,
    ) -> None:
        self.repo = repo
        self.bucket = bucket
        self.settings = settings
        self.nav = nav
        self.fs = fs
        self.tree = NavTree(f"{bucket}/", on_leaf=self.open_node, data="", show_root=True)

    @property
    @override
    def labels(self) -> list[str]:
        return [self.bucket]

    @property
    @override
    def widget(self) -> Widget:
        return self.tree

    @override
    def key_actions(self) -> list[KeyAction]:
        return [
            KeyAction("v", "View", self.view_object),
            KeyAction("m", "Metadata", self.show_metadata),
            KeyAction("T", "Tags", self.show_tags),
            KeyAction("u", "Upload", self.upload),
            KeyAction("d", "Download", self.download),
            KeyAction("c", "Local Dir", self.change_directory),
        ]

    @override
    def render(self) -> None:
        self.tree.reset_nodes()
        self.load(self.tree.root)
        self.tree.root.expand()

    def load(self, node: TreeNode[str]) -> bool:
        prefix = node.data or ""
        listing = self.repo.list_objects(self.bucket, prefix)
        if isinstance(listing, Err):
            self.nav.show_error(listing.unwrap_err())
            return False
        node.remove_children()
        for child in listing.unwrap().prefixes:
            node.add(posixpath.basename(child.rstrip("/")) + "/", data=child)
        for key in listing.unwrap().keys:
            if key == prefix or key.endswith("/"):
                continue
            node.add_leaf(posixpath.basename(key), data=key)
        return True

    def open_node(self, node: TreeNode[str]) -> None:
        key = node.data or ""
        if key and not key.endswith("/"):
            self.view_object()
            return
        if self.load(node) and node.children:
            node.expand()
            self.tree.focus_node(node.children[0])

    def focused_key(self) -> str | None:
        node = self.tree.cursor_node
        if node is None or node.data is None:
            return None
        return node.data

    def _focused_object(self) -> str | None:
        key = self.focused_key()
        if not key or key.endswith("/"):
            return None
        return key

    def view_object(self) -> None:
        key = self._focused_object()
        if key is not None:
            self.nav.push(S3ObjectView(self.repo, self.bucket, key, self.nav))

    def show_metadata(self) -> None:
        key = self._focused_object()
        if key is None:
            return
        self.nav.push(
            KeyValueView(
                self.nav,
                SERVICE,
                [self.bucket, key, "Metadata"],
                lambda: self.repo.object_metadata(self.bucket, key),
            )
        )

    def show_tags(self) -> None:
        key = self._focused_object()
        if key is None:
            return
        self.nav.push(
            KeyValueView(
                self.nav,
                SERVICE,
                [self.bucket, key, "Tags"],
                lambda: self.repo.object_tags(self.bucket, key),
            )
        )

    def upload(self) -> None:
        prefix = parent_prefix(self.focused_key() or "")
        self.nav.push(
            LocalFileSelector(self.repo, self.bucket, prefix, self.settings, self.nav, on_uploaded=self.render, fs=self.fs)
        )

    def download(self) -> None:
        key = self._focused_object()
        if key is not None:
            self.nav.push(S3DownloadForm(self.repo, self.bucket, key, self.settings.local_directory(), self.nav))

    def change_directory(self) -> None:
        self.nav.push(ChangeDirectoryForm(self.settings, self.nav))


class S3ObjectView(DocumentView):
    def __init__(self, repo: S3Repo, bucket: str, key: str, nav: Navigator) -> None:
        super().__init__(nav, SERVICE, [bucket, key], self._read)
        self.repo = repo
        self.bucket = bucket
        self.key = key

    def _read(self) -> Result[str, str]:
        return self.repo.get_object(self.bucket, self.key).map(lambda body: body.decode("utf-8", errors="replace"))


class LocalFileSelector(TableView):
    service = SERVICE
    headers = ("FILE NAME", "SIZE")

    def __init__(
        self,
        repo: S3Repo,
        bucket: str,
        prefix: str,
        settings: SettingsStore,
        nav: Navigator,
        on_uploaded: Callable[[], None] | None = None,
        fs: FileSystem = DEFAULT_FS,
    ) -> None:
        super().__init__(nav)
        self.repo = repo
        self.bucket = bucket
        self.prefix = prefix
        self.settings = settings
        self.on_uploaded = on_uploaded
        self.fs = fs
        self.directory = ""

    @property
    @override
    def labels(self) -> list[str]:
        return [self.bucket, "Upload", self.directory]

    @override
    def key_actions(self) -> list[KeyAction]:
        return [*super().key_actions(), KeyAction("enter", "Upload", lambda: None)]

    @override
    def fetch(self) -> Result[list[Row], str]:
        self.directory = self.settings.local_directory()
        return local_files(self.directory, self.fs).map(lambda files: make_rows([list(f) for f in files]))

    @override
    def on_select(self, row: Row) -> None:
        path = posixpath.join(self.directory, row.cells[0])
        self.nav.push(S3UploadForm(self.repo, self.bucket, self.prefix, path, self.nav, on_complete=self.on_uploaded))


class S3UploadForm(FormView):
    title = "Upload File"
    action_label = "Upload"
    service = SERVICE

    def __init__(
        self,
        repo: S3Repo,
        bucket: str,
        prefix: str,
        path: str,
        nav: Navigator,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(nav, on_complete)
        self.repo = repo
        self.bucket = bucket
        self.prefix = prefix
        self.path = path

    @property
    @override
    def labels(self) -> list[str]:
        return [self.bucket, "Upload", posixpath.basename(self.path)]

    @override
    def fields(self) -> list[Field]:
        return [
            Field("local_file", "Local File", self.path, kind="text"),
            Field("key", "Key", upload_key(self.prefix, self.path)),
            Field("content_type", "Content Type", default_content_type(self.path)),
            Field("acl", "ACL", CANNED_ACLS[0], kind="select", options=CANNED_ACLS),
        ]

    @override
    def submit(self, values: dict[str, str]) -> Result[object, str]:
        key = values["key"].strip()
        if not key:
            return Err("Key is required")
        content_type = values["content_type"].strip() or default_content_type(self.path)
        return self.repo.upload_object(self.bucket, key, self.path, content_type, values["acl"])


class S3DownloadForm(FormView):
    title = "Download File"
    action_label = "Download"
    service = SERVICE

    def __init__(self, repo: S3Repo, bucket: str, key: str, directory: str, nav: Navigator) -> None:
        super().__init__(nav)
        self.repo = repo
        self.bucket = bucket
        self.key = key
        self.directory = directory

    @property
    @override
    def labels(self) -> list[str]:
        return [self.bucket, "Download", self.key]

    @override
    def fields(self) -> list[Field]:
        return [
            Field("key", "Key", self.key, kind="text"),
            Field("directory", "Local Directory", self.directory, kind="text"),
            Field("filename", "File Name", posixpath.basename(self.key)),
        ]

    @override
    def submit(self, values: dict[str, str]) -> Result[object, str]:
        filename = values["filename"].strip()
        if not filename:
            return Err("File name is required")
        destination = download_destination(self.directory, filename)
        downloaded = self.repo.download_object(self.bucket, self.key, destination)
        if isinstance(downloaded, Ok):
            self.nav.notify(f"Downloaded to {downloaded.unwrap()}")
        return downloaded


class ChangeDirectoryForm(FormView):
    title = "Change Local Directory"
    action_label = "Save"
    service = SERVICE

    def __init__(self, settings: SettingsStore, nav: Navigator) -> None:
        super().__init__(nav)
        self.settings = settings

    @property
    @override
    def labels(self) -> list[str]:
        return ["Local Directory"]

    @override
    def fields(self) -> list[Field]:
        return [Field("directory", "Directory", self.settings.local_directory())]

    @override
    def submit(self, values: dict[str, str]) -> Result[object, str]:
        return self.settings.set_local_directory(values["directory"])
