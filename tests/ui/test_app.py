from __future__ import annotations

import asyncio
import json
from pathlib import Path

from result import Err, Ok, Result

from awstui.config.store import SettingsStore
from awstui.models.enums import FilterMode
from awstui.models.records import CallerIdentity, S3Bucket, S3CorsRule, S3Listing, Tag
from awstui.services.catalog import catalog_refs
from awstui.services.filtering import Row, make_rows
from awstui.ui.app import AwsTuiApp
from awstui.ui.chrome import HeaderBand
from awstui.ui.modal import ErrorModal
from awstui.ui.picker import ServicePicker
from awstui.ui.view import Navigator
from awstui.ui.views.common import KeyValueView, TableView
from awstui.ui.views.s3 import S3Buckets, S3CorsRules, S3Objects


class GreekView(TableView):
    service = "Test"
    headers = ("NAME", "SIZE")

    def __init__(self, nav: Navigator, fail: bool = False) -> None:
        super().__init__(nav)
        self.fail = fail
        self.picked: list[str] = []

    @property
    def labels(self) -> list[str]:
        return ["Greek"]

    def fetch(self) -> Result[list[Row], str]:
        if self.fail:
            return Err("ListGreek failed: AccessDenied")
        return Ok(make_rows([["alpha", "1"], ["beta", "2"], ["gamma", "3"]], ["a", "b", "g"]))

    def on_select(self, row: Row) -> None:
        self.picked.append(row.item)


class FailingIdentity:
    def caller_identity(self) -> Result[CallerIdentity, str]:
        return Err("ExpiredToken")

    def account_aliases(self) -> Result[list[str], str]:
        return Ok([])


def _app(settings: SettingsStore) -> AwsTuiApp:
    factories = {ref: GreekView for ref in catalog_refs()}
    return AwsTuiApp(
        root=lambda nav: ServicePicker(nav, settings, factories),
        identity=FailingIdentity(),
        region="eu-west-1",
    )


def test_filter_then_select_and_close(tmp_path: Path) -> None:
    async def scenario() -> None:
        app = _app(SettingsStore(path=str(tmp_path / "settings.json")))
        async with app.run_test() as pilot:
            view = GreekView(app.navigator)
            app.navigator.push(view)
            await pilot.pause()
            assert app.stack.depth == 2

            await pilot.press("slash", "g", "a", "enter")
            await pilot.pause()
            assert [list(row.cells) for row in view.table.state.displayed] == [["gamma", "3"]]

            await pilot.press("enter")
            await pilot.pause()
            assert view.picked == ["g"]

            await pilot.press("escape")
            await pilot.pause()
            assert app.stack.depth == 1

    asyncio.run(scenario())


def test_error_modal_blocks_stack_keys(tmp_path: Path) -> None:
    async def scenario() -> None:
        app = _app(SettingsStore(path=str(tmp_path / "settings.json")))
        async with app.run_test() as pilot:
            view = GreekView(app.navigator, fail=True)
            app.navigator.push(view)
            await pilot.pause()
            assert isinstance(app.screen, ErrorModal)
            assert view.table.state.displayed == []

            await pilot.press("ctrl+t")
            await pilot.pause()
            assert app.stack.depth == 2

            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, ErrorModal)
            assert app.stack.depth == 2

    asyncio.run(scenario())


def test_header_shows_credential_error(tmp_path: Path) -> None:
    async def scenario() -> None:
        app = _app(SettingsStore(path=str(tmp_path / "settings.json")))
        async with app.run_test():
            markup = app.query_one(HeaderBand).account_markup()
            assert "Failed to get AWS credentials" in markup
            assert "ExpiredToken" in markup

    asyncio.run(scenario())


def test_type_ahead_then_favorite(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"

    async def scenario() -> None:
        app = _app(SettingsStore(path=str(path)))
        async with app.run_test() as pilot:
            picker = app.stack.root
            assert isinstance(picker, ServicePicker)

            await pilot.press("r")
            await pilot.pause(0.1)
            assert picker.tree.cursor_node is not None
            assert str(picker.tree.cursor_node.label) == "Roles"

            await pilot.press("d")
            await pilot.pause(0.1)
            assert str(picker.tree.cursor_node.label) == "RDS"

            await pilot.press("escape")
            await pilot.pause()
            assert not picker.tree.search.active

            await pilot.press("b")
            await pilot.pause(0.1)
            await pilot.press("escape", "d")
            await pilot.pause(0.1)

            assert picker.settings.favorites == ["S3.Buckets"]
            assert picker.favorites_node is not None
            assert [str(child.label) for child in picker.favorites_node.children] == ["S3 > Buckets"]

    asyncio.run(scenario())
    assert json.loads(path.read_text()) == {"favorites": ["S3.Buckets"]}


def test_launch_focuses_first_favorite_then_remove(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"favorites": ["S3.Buckets"]}))

    async def scenario() -> None:
        app = _app(SettingsStore(path=str(path)))
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            picker = app.stack.root
            assert isinstance(picker, ServicePicker)
            assert picker.tree.cursor_node is not None
            assert str(picker.tree.cursor_node.label) == "S3 > Buckets"

            await pilot.press("d")
            await pilot.pause(0.1)
            assert picker.settings.favorites == ["S3.Buckets"]
            assert str(picker.tree.cursor_node.label) == "S3 > Buckets"

            await pilot.press("x")
            await pilot.pause(0.1)

            assert picker.settings.favorites == []
            assert picker.favorites_node is None
            assert str(picker.tree.cursor_node.label) == "Services"

    asyncio.run(scenario())
    assert json.loads(path.read_text()) == {"favorites": []}


def test_search_order_follows_picker_insertion(tmp_path: Path) -> None:
    async def scenario() -> None:
        app = _app(SettingsStore(path=str(tmp_path / "settings.json")))
        async with app.run_test():
            picker = app.stack.root
            assert isinstance(picker, ServicePicker)
            labels = [str(node.label) for node in picker.tree._search_nodes]
            assert labels[:2] == ["DynamoDB", "Tables"]
            assert labels.index("IAM") < labels.index("Roles") < labels.index("RDS")

    asyncio.run(scenario())


def test_type_ahead_narrows_then_restarts_after_timeout(tmp_path: Path) -> None:
    async def scenario() -> None:
        app = _app(SettingsStore(path=str(tmp_path / "settings.json")))
        async with app.run_test() as pilot:
            picker = app.stack.root
            assert isinstance(picker, ServicePicker)
            seen: list[tuple[str, str]] = []
            for key in "rds":
                await pilot.press(key)
                await pilot.pause(0.1)
                assert picker.tree.cursor_node is not None
                seen.append((picker.tree.search.buffer, str(picker.tree.cursor_node.label)))

            assert seen == [("r", "Roles"), ("rd", "RDS"), ("rds", "RDS")]
            assert picker.tree.border_title == " Search: rds "

            await pilot.pause(1.2)
            assert not picker.tree.search.active
            assert not picker.tree.border_title

            await pilot.press("s")
            await pilot.pause(0.1)
            assert picker.tree.search.buffer == "s"
            assert str(picker.tree.cursor_node.label) == "Security Groups"

    asyncio.run(scenario())


def test_enter_expands_category_onto_first_child(tmp_path: Path) -> None:
    async def scenario() -> None:
        app = _app(SettingsStore(path=str(tmp_path / "settings.json")))
        async with app.run_test() as pilot:
            picker = app.stack.root
            assert isinstance(picker, ServicePicker)

            await pilot.press("e", "c")
            await pilot.pause(0.1)
            category = picker.tree.cursor_node
            assert category is not None
            assert str(category.label) == "EC2"
            assert not category.is_expanded

            await pilot.press("enter")
            await pilot.pause(0.1)

            assert category.is_expanded
            assert str(picker.tree.cursor_node.label) == "Instances"
            assert app.stack.depth == 1

    asyncio.run(scenario())


def test_tab_opens_and_commits_filter(tmp_path: Path) -> None:
    async def scenario() -> None:
        app = _app(SettingsStore(path=str(tmp_path / "settings.json")))
        async with app.run_test() as pilot:
            view = GreekView(app.navigator)
            app.navigator.push(view)
            await pilot.pause()

            await pilot.press("tab")
            await pilot.pause()
            assert view.table.state.mode is FilterMode.EDITING

            await pilot.press("b", "e", "tab")
            await pilot.pause()

            state = view.table.state
            assert state.mode is FilterMode.COMMITTED
            assert [row.cells for row in state.displayed] == [("beta", "2")]
            assert state.label == "Filter: be"

    asyncio.run(scenario())


class FakeS3Repo:
    def list_buckets(self) -> Result[list[S3Bucket], str]:
        return Ok([S3Bucket(name="assets")])

    def bucket_cors(self, bucket: str) -> Result[list[S3CorsRule], str]:
        return Ok([S3CorsRule(allowed_methods=("GET", "HEAD"), allowed_origins=("*",), max_age=600, id="public")])

    def list_objects(self, bucket: str, prefix: str = "") -> Result[S3Listing, str]:
        return Ok(S3Listing(keys=["index.html"]))

    def object_tags(self, bucket: str, key: str) -> Result[list[Tag], str]:
        return Ok([Tag("cache", f"{bucket}/{key}")])


def test_bucket_cors_rules_view(tmp_path: Path) -> None:
    async def scenario() -> None:
        settings = SettingsStore(path=str(tmp_path / "settings.json"))
        app = _app(settings)
        async with app.run_test() as pilot:
            app.navigator.push(S3Buckets(FakeS3Repo(), settings, app.navigator))  # type: ignore[arg-type]
            await pilot.pause()

            await pilot.press("c")
            await pilot.pause()

            view = app.stack.active
            assert isinstance(view, S3CorsRules)
            assert view.labels == ["Buckets", "assets", "CORS Rules"]
            assert [row.cells for row in view.table.state.displayed] == [
                ("public", "GET, HEAD", "*", "", "", "600"),
            ]

    asyncio.run(scenario())


def test_object_tags_view(tmp_path: Path) -> None:
    async def scenario() -> None:
        settings = SettingsStore(path=str(tmp_path / "settings.json"))
        app = _app(settings)
        async with app.run_test() as pilot:
            objects = S3Objects(FakeS3Repo(), "assets", settings, app.navigator)  # type: ignore[arg-type]
            app.navigator.push(objects)
            await pilot.pause()
            objects.tree.focus_node(objects.tree.root.children[0])
            await pilot.pause()

            await pilot.press("T")
            await pilot.pause()

            view = app.stack.active
            assert isinstance(view, KeyValueView)
            assert view.labels == ["assets", "index.html", "Tags"]
            assert [row.cells for row in view.table.state.displayed] == [("cache", "assets/index.html")]

    asyncio.run(scenario())
