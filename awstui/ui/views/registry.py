from __future__ import annotations

from awstui.config.store import SettingsStore
from awstui.repo.clients import Repositories
from awstui.repo.resources import RESOURCE_LISTINGS
from awstui.services.catalog import favorite_ref, split_ref
from awstui.ui.picker import ViewFactory
from awstui.ui.view import Navigator, View
from awstui.ui.views.common import ResourceTableView
from awstui.ui.views.route53 import Route53HostedZones
from awstui.ui.views.s3 import S3Buckets


def _listing_factory(repos: Repositories, ref: str) -> ViewFactory:
    listing = RESOURCE_LISTINGS[ref]
    parts = split_ref(ref)
    if parts is None:
        raise ValueError(f"Bad view reference: {ref}")
    service, label = parts

    def build(nav: Navigator) -> View:
        return ResourceTableView(nav, service, label, listing, repos.client(listing.client))

    return build


def view_factories(repos: Repositories, settings: SettingsStore) -> dict[str, ViewFactory]:
    """Map every catalog reference to the view it opens."""
    factories: dict[str, ViewFactory] = {
        ref: _listing_factory(repos, ref) for ref in RESOURCE_LISTINGS
    }
    factories[favorite_ref("Route 53", "Hosted Zones")] = lambda nav: Route53HostedZones(repos.route53, nav)
    factories[favorite_ref("S3", "Buckets")] = lambda nav: S3Buckets(repos.s3, settings, nav)
    return factories
