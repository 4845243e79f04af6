from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from .. import routing
from ..models.access import DerivedAccessState


SETTINGS_ENTRY = "Settings"


@dataclass(frozen=True)
class NavEntry:
    name: str
    href: str
    icon: str
    sub_entries: Tuple["NavEntry", ...] = ()


BUSINESS_NAVIGATION: Tuple[NavEntry, ...] = (
    NavEntry("Dashboard", routing.DASHBOARD_PATH, "bar-chart"),
    NavEntry("Reviews", routing.REVIEWS_PATH, "star"),
    NavEntry("Review Link", routing.REVIEW_LINK_PATH, "link"),
    NavEntry(
        SETTINGS_ENTRY,
        routing.SETTINGS_PATH,
        "settings",
        sub_entries=(
            NavEntry("Account", routing.ACCOUNT_SETTINGS_PATH, "user"),
            NavEntry("Locations", routing.LOCATION_SETTINGS_PATH, "map-pin"),
            NavEntry("Business Users", routing.BUSINESS_USERS_SETTINGS_PATH, "users"),
        ),
    ),
)


class NavItemView(BaseModel):
    name: str
    icon: str
    href: Optional[str] = Field(
        default=None, description="Navigation target; None while the entry is disabled."
    )
    active: bool = False
    disabled: bool = False
    expandable: bool = False
    expanded: bool = False
    children: List["NavItemView"] = Field(default_factory=list)


NavItemView.model_rebuild()


class NavigationView(BaseModel):
    items: List[NavItemView]

    def find(self, name: str) -> Optional[NavItemView]:
        for item in self.items:
            if item.name == name:
                return item
            for child in item.children:
                if child.name == name:
                    return child
        return None

    def resolve(self, name: str) -> Optional[str]:
        """
        Path a click on `name` navigates to. Disabled entries, unknown names
        and the expandable Settings header resolve to None.
        """
        item = self.find(name)
        if item is None or item.disabled or item.expandable:
            return None
        return item.href


def is_settings_path(pathname: str) -> bool:
    return "/settings" in pathname


def should_force_settings_open(pathname: str) -> bool:
    return any(
        pathname == sub.href
        for entry in BUSINESS_NAVIGATION
        for sub in entry.sub_entries
    )


def build_navigation(
    current_path: str,
    access: DerivedAccessState,
    settings_expanded: bool = False,
) -> NavigationView:
    """
    Render the business menu for `current_path`.

    While the account is locked every entry except Settings is disabled,
    so the upgrade flow stays reachable.
    """
    items: List[NavItemView] = []
    for entry in BUSINESS_NAVIGATION:
        is_settings = entry.name == SETTINGS_ENTRY
        active = current_path == entry.href or (is_settings and is_settings_path(current_path))
        disabled = access.is_locked and not is_settings
        expanded = bool(entry.sub_entries) and (
            settings_expanded or should_force_settings_open(current_path)
        )
        children = [
            NavItemView(
                name=sub.name,
                icon=sub.icon,
                href=sub.href,
                active=current_path == sub.href,
            )
            for sub in entry.sub_entries
        ] if expanded else []
        items.append(
            NavItemView(
                name=entry.name,
                icon=entry.icon,
                href=None if disabled else entry.href,
                active=active,
                disabled=disabled,
                expandable=bool(entry.sub_entries),
                expanded=expanded,
                children=children,
            )
        )
    return NavigationView(items=items)
