"""Roulette Controller - tests for intents over the fake store and scripted fetcher.

Invariants:
    - Draws use committed filters and the committed member count
    - Filter apply and roster confirm persist and clear results
    - Team assignment follows the committed toggle and is keyed by index
    - Load/refresh failures degrade to a status message, prior catalogs stay
    - Store failures never abort an intent
"""

import json

import pytest

from splaroulette.core.catalog_snapshot import CATALOG_KEYS, SELECTED_ITEMS_KEY
from splaroulette.core.domain_types import CatalogType, Team
from splaroulette.core.errors import (
    EmptyPoolError, FetchError, InvalidMemberCountError, TeamDivisionDisabledError,
)


# -- start -----------------------------------------------------------------------------

async def test_start_loads_catalogs_with_everything_selected(controller):
    view = controller.view()
    assert [e["key"] for e in view["catalogs"]["rule"]] == ["area", "yagura"]
    assert all(e["committed"] and e["pending"] for e in view["catalogs"]["weapon"])
    assert view["filters"]["stage"] == {"dirty": False, "selected_count": 2, "available_count": 2}
    assert view["status_message"] is None
    assert view["roster"]["committed"]["member_count"] == 4
    assert view["results"] == {}
    assert view["teams"] == {}


async def test_start_uses_display_names(controller):
    names = [e["name"] for e in controller.view()["catalogs"]["rule"]]
    assert names == ["ガチエリア", "ガチヤグラ"]


async def test_start_failure_degrades_with_status(make_controller, fetcher):
    fetcher.responses[CatalogType.RULE] = FetchError("rule", 500)
    instance = make_controller()
    assert await instance.start() is False
    view = instance.view()
    assert view["status_message"] == "エラー: データを読み込めません"
    assert view["catalogs"] == {"rule": [], "stage": [], "weapon": []}
    with pytest.raises(EmptyPoolError) as exc_info:
        instance.draw(CatalogType.RULE)
    assert exc_info.value.context.user_message == "利用可能なルールがありません"


async def test_start_restores_roster_and_divides_teams(make_controller, store):
    store.data.update({
        "memberCount": "3",
        "memberName1": "Alice",
        "memberName3": "",
        "teamDivisionToggle": "true",
    })
    instance = make_controller()
    await instance.start()
    roster = instance.view()["roster"]["committed"]
    assert roster["member_count"] == 3
    assert roster["names"] == {1: "Alice", 2: "メンバー2", 3: "メンバー3"}
    assert roster["team_division_enabled"] is True
    assert set(instance.teams) == {1, 2, 3}


async def test_start_restores_selection_dropping_stale_keys(make_controller, store):
    store.data[SELECTED_ITEMS_KEY] = json.dumps({"rule": ["yagura", "gone"], "stage": []})
    instance = make_controller()
    await instance.start()
    assert instance.selections[CatalogType.RULE].committed == frozenset({"yagura"})
    assert instance.selections[CatalogType.STAGE].committed == frozenset()
    assert instance.selections[CatalogType.WEAPON].committed == frozenset(
        {"sshooter", "wakaba", "splatcharger"},
    )


async def test_start_ignores_garbage_roster_values(make_controller, store):
    store.data.update({"memberCount": "many", "teamDivisionToggle": "yes"})
    instance = make_controller()
    await instance.start()
    assert instance.roster.committed.member_count == 4
    assert instance.roster.committed.team_division_enabled is False


# -- draws -----------------------------------------------------------------------------

async def test_draw_rule_writes_shared_slot(controller):
    for _ in range(20):
        view = controller.draw(CatalogType.RULE)
        assert view["results"]["common-rule"]["key"] in {"area", "yagura"}


async def test_draw_weapon_one_per_committed_member(controller):
    view = controller.draw(CatalogType.WEAPON)
    assert sorted(view["results"]) == ["1-weapon", "2-weapon", "3-weapon", "4-weapon"]
    keys = {r["key"] for r in view["results"].values()}
    assert keys <= {"sshooter", "wakaba", "splatcharger"}


async def test_draw_ignores_pending_member_count(controller):
    controller.set_member_count(2)
    view = controller.draw(CatalogType.WEAPON)
    assert len(view["results"]) == 4


async def test_draw_uses_committed_filter_not_pending(controller):
    controller.toggle_filter_item(CatalogType.RULE, "area", False)
    keys = {controller.draw(CatalogType.RULE)["results"]["common-rule"]["key"] for _ in range(30)}
    assert keys == {"area", "yagura"}

    controller.apply_filters(CatalogType.RULE)
    keys = {controller.draw(CatalogType.RULE)["results"]["common-rule"]["key"] for _ in range(30)}
    assert keys == {"yagura"}


async def test_empty_committed_filter_draws_from_everything(controller):
    controller.select_all(CatalogType.STAGE, False)
    controller.apply_filters()
    assert controller.view()["filters"]["stage"]["available_count"] == 2
    keys = {controller.draw(CatalogType.STAGE)["results"]["common-stage"]["key"] for _ in range(30)}
    assert keys == {"yunohana", "gonzui"}


async def test_draw_all_fills_every_slot(controller):
    view = controller.draw_all()
    assert set(view["results"]) == {
        "common-rule", "common-stage", "1-weapon", "2-weapon", "3-weapon", "4-weapon",
    }


async def test_draw_all_refused_as_a_whole_on_empty_pool(make_controller, fetcher):
    fetcher.responses[CatalogType.WEAPON] = []
    instance = make_controller()
    await instance.start()
    with pytest.raises(EmptyPoolError) as exc_info:
        instance.draw_all()
    assert exc_info.value.catalog_type == "weapon"
    assert exc_info.value.context.user_message == "利用可能なブキがありません"
    assert instance.results == {}


# -- filters ---------------------------------------------------------------------------

async def test_filter_edit_is_dirty_until_applied(controller, store):
    view = controller.toggle_filter_item(CatalogType.WEAPON, "wakaba", False)
    assert view["filters"]["weapon"]["dirty"] is True
    assert SELECTED_ITEMS_KEY not in store.data

    view = controller.apply_filters()
    assert view["filters"]["weapon"]["dirty"] is False
    stored = json.loads(store.data[SELECTED_ITEMS_KEY])
    assert stored["weapon"] == ["splatcharger", "sshooter"]
    assert stored["rule"] == ["area", "yagura"]


async def test_apply_single_type_leaves_others_pending(controller):
    controller.toggle_filter_item(CatalogType.RULE, "area", False)
    controller.toggle_filter_item(CatalogType.STAGE, "gonzui", False)
    view = controller.apply_filters(CatalogType.RULE)
    assert view["filters"]["rule"]["dirty"] is False
    assert view["filters"]["stage"]["dirty"] is True


async def test_apply_clears_results(controller):
    controller.draw_all()
    assert controller.apply_filters()["results"] == {}


async def test_discard_filters_restores_committed(controller):
    controller.select_all(CatalogType.RULE, False)
    view = controller.discard_filters()
    assert view["filters"]["rule"] == {"dirty": False, "selected_count": 2, "available_count": 2}


async def test_apply_survives_store_failure(controller, store):
    store.fail_writes = True
    controller.toggle_filter_item(CatalogType.RULE, "area", False)
    view = controller.apply_filters()
    assert view["filters"]["rule"]["dirty"] is False
    assert controller.selections[CatalogType.RULE].committed == frozenset({"yagura"})


async def test_apply_before_catalogs_load_keeps_stored_selection(make_controller, store, fetcher):
    saved = '{"rule": ["area"], "stage": ["yunohana"], "weapon": ["wakaba"]}'
    store.data[SELECTED_ITEMS_KEY] = saved
    fetcher.responses[CatalogType.WEAPON] = FetchError("weapon", 500)
    instance = make_controller()
    assert await instance.start() is False

    instance.apply_filters()
    assert json.loads(store.data[SELECTED_ITEMS_KEY]) == json.loads(saved)

    fetcher.responses[CatalogType.WEAPON] = [{"key": "wakaba"}, {"key": "sshooter"}]
    restarted = make_controller()
    assert await restarted.start() is True
    assert restarted.selections[CatalogType.RULE].committed == frozenset({"area"})
    assert restarted.selections[CatalogType.WEAPON].committed == frozenset({"wakaba"})


# -- roster ----------------------------------------------------------------------------

async def test_name_change_then_confirm_persists(controller, store):
    view = controller.set_member_name(2, "Bob")
    assert view["roster"]["dirty"] is True
    assert view["roster"]["committed"]["names"][2] == "メンバー2"

    view = controller.confirm_roster()
    assert view["roster"]["dirty"] is False
    assert store.data["memberName2"] == "Bob"
    assert store.data["memberCount"] == "4"
    assert store.data["teamDivisionToggle"] == "false"


async def test_confirm_count_change_reinitializes_results(controller):
    controller.draw(CatalogType.WEAPON)
    controller.set_member_count(2)
    view = controller.confirm_roster()
    assert view["results"] == {}
    view = controller.draw(CatalogType.WEAPON)
    assert sorted(view["results"]) == ["1-weapon", "2-weapon"]


async def test_confirm_with_team_division_assigns_teams(controller):
    controller.set_team_division(True)
    view = controller.confirm_roster()
    teams = view["teams"]
    assert set(teams) == {1, 2, 3, 4}
    assert [t["team"] for t in teams.values()].count("alpha") == 2
    assert {t["label"] for t in teams.values()} == {"アルファグループ", "ブラボーグループ"}


async def test_confirm_with_team_division_off_clears_teams(controller):
    controller.set_team_division(True)
    controller.confirm_roster()
    controller.set_team_division(False)
    assert controller.confirm_roster()["teams"] == {}


async def test_duplicate_names_each_get_a_team(controller):
    controller.set_member_count(2)
    controller.set_member_name(1, "X")
    controller.set_member_name(2, "X")
    controller.set_team_division(True)
    controller.confirm_roster()
    assert sorted(controller.teams) == [1, 2]
    assert sorted(t.value for t in controller.teams.values()) == ["alpha", "bravo"]


async def test_shuffle_teams_requires_committed_toggle(controller):
    controller.set_team_division(True)
    with pytest.raises(TeamDivisionDisabledError):
        controller.shuffle_teams()


async def test_shuffle_teams_keeps_results(controller):
    controller.set_team_division(True)
    controller.confirm_roster()
    controller.draw_all()
    view = controller.shuffle_teams()
    assert len(view["results"]) == 6
    assert set(controller.teams.values()) == {Team.ALPHA, Team.BRAVO}


async def test_discard_roster(controller):
    controller.set_member_count(7)
    view = controller.discard_roster()
    assert view["roster"]["pending"]["member_count"] == 4
    assert view["roster"]["dirty"] is False


async def test_invalid_count_rejected_without_change(controller):
    with pytest.raises(InvalidMemberCountError):
        controller.set_member_count(9)
    assert controller.roster.is_dirty is False


async def test_confirm_survives_store_failure(controller, store):
    store.fail_writes = True
    controller.set_member_name(1, "Alice")
    view = controller.confirm_roster()
    assert view["roster"]["committed"]["names"][1] == "Alice"
    assert "memberName1" not in store.data


# -- refresh ---------------------------------------------------------------------------

async def test_refresh_resets_selections_to_all(controller, store, fetcher):
    controller.toggle_filter_item(CatalogType.RULE, "area", False)
    controller.apply_filters()
    fetcher.responses[CatalogType.RULE] = [{"key": "asari", "name": {"ja_JP": "ガチアサリ"}}]
    view = await controller.refresh_catalogs()
    assert [e["key"] for e in view["catalogs"]["rule"]] == ["asari"]
    assert view["filters"]["rule"]["selected_count"] == 1
    assert SELECTED_ITEMS_KEY not in store.data
    assert CATALOG_KEYS[CatalogType.RULE] in store.data


async def test_refresh_failure_keeps_prior_catalogs(controller, fetcher):
    fetcher.responses[CatalogType.STAGE] = FetchError("stage", 502)
    with pytest.raises(FetchError) as exc_info:
        await controller.refresh_catalogs()
    assert exc_info.value.context.user_message == "更新に失敗しました"
    view = controller.view()
    assert view["status_message"] == "更新に失敗しました"
    assert [e["key"] for e in view["catalogs"]["stage"]] == ["yunohana", "gonzui"]
    assert controller.draw(CatalogType.STAGE)["results"]["common-stage"]


async def test_successful_refresh_clears_status(controller, fetcher):
    fetcher.responses[CatalogType.STAGE] = FetchError("stage", 502)
    with pytest.raises(FetchError):
        await controller.refresh_catalogs()
    fetcher.responses[CatalogType.STAGE] = [{"key": "gonzui"}]
    view = await controller.refresh_catalogs()
    assert view["status_message"] is None


# -- observers & preferences -----------------------------------------------------------

async def test_listeners_receive_view_and_can_unsubscribe(controller):
    seen = []
    unsubscribe = controller.subscribe(seen.append)
    controller.toggle_filter_item(CatalogType.RULE, "area", False)
    assert len(seen) == 1
    assert seen[0]["filters"]["rule"]["dirty"] is True
    unsubscribe()
    controller.discard_filters()
    assert len(seen) == 1
    unsubscribe()


async def test_failing_listener_does_not_fail_committed_intent(controller, store, caplog):
    def broken(view):
        raise RuntimeError("render failed")

    seen = []
    controller.subscribe(broken)
    controller.subscribe(seen.append)
    controller.set_member_count(2)
    view = controller.confirm_roster()
    assert view["roster"]["committed"]["member_count"] == 2
    assert store.data["memberCount"] == "2"
    assert seen[-1]["roster"]["dirty"] is False
    assert "Change listener" in caplog.text


async def test_preferences_defaults_and_save(controller, store):
    assert controller.preferences() == {
        "sections": {"controlsSection": False},
        "filter_section_expanded": True,
    }
    prefs = controller.save_section_states({"controlsSection": True, "resultsSection": False})
    assert prefs["sections"] == {"controlsSection": True, "resultsSection": False}
    prefs = controller.save_filter_section(False)
    assert prefs["filter_section_expanded"] is False
    assert store.data["spla-filter-section-state"] == "false"
