from __future__ import annotations

from dataclasses import dataclass, field

SERVICE_CATALOG: dict[str, tuple[str, ...]] = {
    "DynamoDB": ("Tables",),
    "EC2": ("Instances", "Security Groups", "Key Pairs"),
    "IAM": ("Users", "Roles", "Groups"),
    "Lambda": ("Functions",),
    "RDS": ("Clusters", "Instances", "Subnet Groups"),
    "Route 53": ("Hosted Zones", "Health Checks"),
    "S3": ("Buckets",),
    "SNS": ("Topics",),
    "SQS": ("Queues",),
    "Secrets Manager": ("Secrets",),
    "Systems Manager": ("Parameters",),
}

FAVORITES_LABEL = "Favorites"
SERVICES_LABEL = "Services"


def favorite_ref(service: str, view: str) -> str:
    return f"{service}.{view}"


def split_ref(ref: str) -> tuple[str, str] | None:
    service, sep, view = ref.partition(".")
    if not sep or not service or not view:
        return None
    return service, view


def favorite_label(ref: str) -> str | None:
    parts = split_ref(ref)
    if parts is None:
        return None
    return f"{parts[0]} > {parts[1]}"


def catalog_refs(catalog: dict[str, tuple[str, ...]] = SERVICE_CATALOG) -> list[str]:
    return [favorite_ref(service, view) for service in sorted(catalog) for view in catalog[service]]


@dataclass(slots=True)
class PickerEntry:
    label: str
    ref: str | None = None
    children: list[PickerEntry] = field(default_factory=list)
    expanded: bool = False


def picker_sections(
    favorites: list[str],
    catalog: dict[str, tuple[str, ...]] = SERVICE_CATALOG,
) -> list[PickerEntry]:
    """Favorites (when any) and Services, in display order."""
    sections: list[PickerEntry] = []
    known = set(catalog_refs(catalog))

    if favorites:
        favorites_entry = PickerEntry(label=FAVORITES_LABEL, expanded=True)
        for ref in favorites:
            label = favorite_label(ref)
            # unknown references stay in settings but are not shown
            if label is None or ref not in known:
                continue
            favorites_entry.children.append(PickerEntry(label=label, ref=ref))
        sections.append(favorites_entry)

    services_entry = PickerEntry(label=SERVICES_LABEL, expanded=True)
    for service in sorted(catalog):
        category = PickerEntry(label=service)
        for view in catalog[service]:
            category.children.append(PickerEntry(label=view, ref=favorite_ref(service, view)))
        services_entry.children.append(category)
    sections.append(services_entry)
    return sections

