from __future__ import annotations

from typing import Callable, override

from result import Err, Result

from awstui.models.enums import FormMode
from awstui.models.keys import KeyAction
from awstui.models.records import HostedZone, Route53Record
from awstui.repo.route53 import Route53Repo
from awstui.services.filtering import Row, make_rows
from awstui.services.records import (
    RECORD_HEADERS,
    RECORD_TYPES,
    ZONE_HEADERS,
    build_record,
    record_draft,
    record_row,
    zone_root,
    zone_row,
)
from awstui.ui.forms import Field, FormView
from awstui.ui.view import Navigator
from awstui.ui.views.common import KeyValueView, TableView

SERVICE = "Route 53"


class Route53HostedZones(TableView):
    service = SERVICE
    headers = ZONE_HEADERS

    def __init__(self, repo: Route53Repo, nav: Navigator) -> None:
        super().__init__(nav)
        self.repo = repo

    @property
    @override
    def labels(self) -> list[str]:
        return ["Hosted Zones"]

    @override
    def key_actions(self) -> list[KeyAction]:
        return [
            *super().key_actions(),
            KeyAction("enter", "Records", lambda: None),
            KeyAction("T", "Tags", self.show_tags),
        ]

    @override
    def fetch(self) -> Result[list[Row], str]:
        return self.repo.list_hosted_zones().map(lambda zones: make_rows([zone_row(z) for z in zones], zones))

    @override
    def on_select(self, row: Row) -> None:
        zone: HostedZone = row.item
        self.nav.push(Route53Records(self.repo, zone, self.nav))

    def show_tags(self) -> None:
        zone: HostedZone | None = self.selected_item()
        if zone is None:
            return
        self.nav.push(
            KeyValueView(self.nav, SERVICE, ["Hosted Zones", zone.name, "Tags"], lambda: self.repo.zone_tags(zone.id))
        )


class Route53Records(TableView):
    service = SERVICE
    headers = RECORD_HEADERS

    def __init__(self, repo: Route53Repo, zone: HostedZone, nav: Navigator) -> None:
        super().__init__(nav)
        self.repo = repo
        self.zone = zone

    @property
    @override
    def labels(self) -> list[str]:
        return [self.zone.name]

    @override
    def key_actions(self) -> list[KeyAction]:
        return [
            *super().key_actions(),
            KeyAction("c", "Create", self.create),
            KeyAction("enter", "Update", lambda: None),
            KeyAction("backspace", "Delete", self.delete),
            KeyAction("delete", "Delete", self.delete),
        ]

    @override
    def fetch(self) -> Result[list[Row], str]:
        return self.repo.list_records(self.zone.id).map(
            lambda records: make_rows([record_row(r) for r in records], records)
        )

    def _open_form(self, mode: FormMode, record: Route53Record | None) -> None:
        self.nav.push(Route53RecordForm(self.repo, self.zone, mode, record, self.nav, on_complete=self.render))

    def create(self) -> None:
        self._open_form(FormMode.CREATE, None)

    @override
    def on_select(self, row: Row) -> None:
        self._open_form(FormMode.UPDATE, row.item)

    def delete(self) -> None:
        record: Route53Record | None = self.selected_item()
        if record is not None:
            self._open_form(FormMode.DELETE, record)


_FORM_TITLES: dict[FormMode, tuple[str, str]] = {
    FormMode.CREATE: ("Create Record", "Create"),
    FormMode.UPDATE: ("Update Record", "Update"),
    FormMode.DELETE: ("Delete Record", "Delete"),
}


class Route53RecordForm(FormView):
    service = SERVICE

    def __init__(
        self,
        repo: Route53Repo,
        zone: HostedZone,
        mode: FormMode,
        record: Route53Record | None,
        nav: Navigator,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        if mode is not FormMode.CREATE and record is None:
            raise ValueError(f"{mode.value} needs an existing record")
        self.title, self.action_label = _FORM_TITLES[mode]
        super().__init__(nav, on_complete)
        self.repo = repo
        self.zone = zone
        self.mode = mode
        self.record = record

    @property
    @override
    def labels(self) -> list[str]:
        return [self.zone.name, self.title]

    @override
    def fields(self) -> list[Field]:
        draft = record_draft(self.record, self.zone.name)
        name_label = f"Record Name (.{zone_root(self.zone.name)})"
        if self.mode is FormMode.DELETE:
            return [
                Field("name", name_label, draft.name, kind="text"),
                Field("type", "Type", draft.type, kind="text"),
                Field("ttl", "TTL", draft.ttl, kind="text"),
                Field("value", "Values", draft.value, kind="text"),
            ]
        record_type = draft.type if draft.type in RECORD_TYPES else RECORD_TYPES[0]
        return [
            Field("name", name_label, draft.name),
            Field("type", "Type", record_type, kind="select", options=RECORD_TYPES),
            Field("ttl", "TTL", draft.ttl),
            Field("value", "Values (one per line)", draft.value, kind="area"),
        ]

    @override
    def submit(self, values: dict[str, str]) -> Result[object, str]:
        if self.mode is FormMode.DELETE:
            assert self.record is not None
            return self.repo.delete_record(self.zone.id, self.record)

        built = build_record(values["name"], self.zone.name, values["type"], values["ttl"], values["value"])
        if isinstance(built, Err):
            return built
        if self.mode is FormMode.CREATE:
            return self.repo.create_record(self.zone.id, built.unwrap())
        assert self.record is not None
        return self.repo.update_record(self.zone.id, self.record, built.unwrap())
