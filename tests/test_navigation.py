from __future__ import annotations

from review_dashboard import routing
from review_dashboard.models.access import DerivedAccessState
from review_dashboard.services.navigation import build_navigation


LOCKED = DerivedAccessState(trial_ended=True)
TRIAL = DerivedAccessState(is_trial=True, days_left_trial=5)


def test_locked_account_disables_everything_but_settings():
    nav = build_navigation(routing.DASHBOARD_PATH, LOCKED)
    by_name = {item.name: item for item in nav.items}

    for name in ("Dashboard", "Reviews", "Review Link"):
        assert by_name[name].disabled is True
        assert by_name[name].href is None
        assert nav.resolve(name) is None
    assert by_name["Settings"].disabled is False
    assert by_name["Settings"].href == routing.SETTINGS_PATH


def test_locked_account_can_still_reach_settings_pages():
    nav = build_navigation(routing.DASHBOARD_PATH, LOCKED, settings_expanded=True)
    assert nav.resolve("Account") == routing.ACCOUNT_SETTINGS_PATH
    assert nav.resolve("Business Users") == routing.BUSINESS_USERS_SETTINGS_PATH


def test_active_subscription_after_trial_unlocks_navigation():
    access = DerivedAccessState(trial_ended=True, subscription_active=True, has_subscription=True)
    nav = build_navigation(routing.DASHBOARD_PATH, access)
    assert all(not item.disabled for item in nav.items)


def test_trial_account_navigates_everywhere():
    nav = build_navigation(routing.DASHBOARD_PATH, TRIAL)
    assert all(not item.disabled for item in nav.items)
    assert nav.resolve("Reviews") == routing.REVIEWS_PATH
    assert nav.resolve("Review Link") == routing.REVIEW_LINK_PATH


def test_settings_header_is_a_toggle_not_a_link():
    nav = build_navigation(routing.DASHBOARD_PATH, TRIAL)
    assert nav.resolve("Settings") is None
    assert nav.resolve("Unknown") is None


def test_current_path_marks_entry_active():
    nav = build_navigation(routing.REVIEWS_PATH, TRIAL)
    active = [item.name for item in nav.items if item.active]
    assert active == ["Reviews"]


def test_settings_collapsed_by_default():
    nav = build_navigation(routing.DASHBOARD_PATH, TRIAL)
    settings = nav.find("Settings")
    assert settings.expandable is True
    assert settings.expanded is False
    assert settings.children == []


def test_sub_entry_path_forces_settings_open():
    nav = build_navigation(routing.LOCATION_SETTINGS_PATH, TRIAL, settings_expanded=False)
    settings = nav.find("Settings")
    assert settings.active is True
    assert settings.expanded is True
    assert [child.name for child in settings.children] == ["Account", "Locations", "Business Users"]
    assert [child.name for child in settings.children if child.active] == ["Locations"]


def test_settings_root_is_active_but_not_forced_open():
    nav = build_navigation(routing.SETTINGS_PATH, TRIAL)
    settings = nav.find("Settings")
    assert settings.active is True
    assert settings.expanded is False
