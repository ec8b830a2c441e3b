"""
Tests for the menu transform, icon lookup and the menu source (backend or
static tree).
"""

from unittest.mock import Mock, patch

import pytest
import requests

import menu_service
from config import MAX_MENU_DEPTH
from menu_service import (
    create_locale_key,
    fetch_backend_menus,
    flatten_routes,
    get_user_menus,
    localise,
    render_menu_icon,
    transform_user_menus,
)


def _menu(menu_id, name, route, icon="", children=None):
    return {
        "menu_id": menu_id,
        "menu_name": name,
        "route_path": route,
        "icon": icon,
        "children": children or [],
    }


class TestCreateLocaleKey:

    def test_two_segment_route(self):
        assert create_locale_key("公司管理", "/system/company-list") == "menu.system.company-list"

    def test_deep_route_joins_every_segment(self):
        assert create_locale_key("详情", "/business/policy/detail") == "menu.business.policy.detail"

    def test_short_route_uses_name_table(self):
        assert create_locale_key("系统管理", "/system") == "menu.system"
        assert create_locale_key("首页", "") == "menu.home"

    def test_unknown_name_is_slugged(self):
        assert create_locale_key("Data  Center", "/dc") == "menu.data-center"


class TestMenuIcons:

    def test_known_icon(self):
        assert render_menu_icon("company") == "🏦"

    @pytest.mark.parametrize("name", ["", None, "no-such-icon"])
    def test_missing_or_unknown_icon(self, name):
        assert render_menu_icon(name) is None


class TestTransformUserMenus:

    def test_tree_shape_and_order(self):
        menus = [
            _menu("home", "首页", "/welcome", "home"),
            _menu("system", "系统管理", "/system", "system", children=[
                _menu("u", "用户管理", "/system/user-management", "user"),
                _menu("r", "角色管理", "/system/role-management", "team"),
            ]),
        ]

        result = transform_user_menus(menus)

        assert result[0] == {
            "key": "home",
            "name": "首页",
            "path": "/welcome",
            "icon": "🏠",
            "locale": "menu.home",
        }
        assert result[1]["locale"] == "menu.system"
        assert [r["key"] for r in result[1]["routes"]] == ["u", "r"]
        assert result[1]["routes"][0]["locale"] == "menu.system.user-management"

    def test_leaves_have_no_routes(self):
        result = transform_user_menus([_menu("a", "A", "/x/a")])

        assert "routes" not in result[0]

    def test_empty_and_missing_input(self):
        assert transform_user_menus([]) == []
        assert transform_user_menus(None) == []

    def test_missing_name_is_rejected(self):
        with pytest.raises(ValueError):
            transform_user_menus([{"menu_id": "x", "route_path": "/x"}])

    def test_depth_is_capped(self, capsys):
        node = _menu("leaf", "Leaf", "/leaf")
        for level in range(MAX_MENU_DEPTH + 3):
            node = _menu(f"n{level}", f"N{level}", f"/n{level}", children=[node])

        result = transform_user_menus([node])

        depth = 0
        current = result
        while current:
            depth += 1
            current = current[0].get("routes")
        assert depth == MAX_MENU_DEPTH
        assert "WARNING" in capsys.readouterr().err


class TestLocalise:

    def test_known_key(self):
        assert localise("menu.system.company-list", "x") == "公司管理"

    def test_unknown_key_falls_back(self):
        assert localise("menu.nowhere", "Nowhere") == "Nowhere"


class TestMenuSource:

    def _response(self, body, status_error=None):
        response = Mock()
        response.json.return_value = body
        response.raise_for_status.side_effect = status_error
        return response

    def test_backend_menus_are_unwrapped(self):
        data = [_menu("a", "A", "/a")]
        with patch("menu_service.requests.get", return_value=self._response({"code": 200, "data": data})) as get:
            assert fetch_backend_menus("http://api.local/", token="t0k") == data

        get.assert_called_once()
        assert get.call_args.args[0] == "http://api.local/api/v1/menus/user"
        assert get.call_args.kwargs["headers"] == {"Authorization": "Bearer t0k"}

    def test_backend_error_code(self, capsys):
        with patch("menu_service.requests.get", return_value=self._response({"code": 401, "message": "expired"})):
            assert fetch_backend_menus("http://api.local") is None
        assert "CRITICAL" in capsys.readouterr().err

    def test_backend_unreachable(self, capsys):
        with patch("menu_service.requests.get", side_effect=requests.ConnectionError("down")):
            assert fetch_backend_menus("http://api.local") is None
        assert "CRITICAL" in capsys.readouterr().err

    def test_static_tree_when_no_backend(self):
        with patch.object(menu_service, "MENU_API_URL", ""):
            menus = get_user_menus("auditor")

        assert [m["menu_id"] for m in menus] == ["home", "audit"]

    def test_backend_failure_falls_back_to_static_tree(self):
        with patch.object(menu_service, "MENU_API_URL", "http://api.local"), \
                patch("menu_service.fetch_backend_menus", return_value=None):
            menus = get_user_menus("auditor")

        assert [m["menu_id"] for m in menus] == ["home", "audit"]

    def test_backend_menus_win(self):
        data = [_menu("remote", "Remote", "/remote")]
        with patch.object(menu_service, "MENU_API_URL", "http://api.local"), \
                patch("menu_service.fetch_backend_menus", return_value=data):
            assert get_user_menus("auditor") == data

    def test_backend_menus_are_cached_between_reruns(self):
        data = [_menu("a", "A", "/a")]
        with patch("menu_service.requests.get", return_value=self._response({"code": 200, "data": data})) as get:
            first = fetch_backend_menus("http://api.local", token="t0k")
            second = fetch_backend_menus("http://api.local", token="t0k")

        assert first == second == data
        get.assert_called_once()

    def test_cache_is_keyed_on_token(self):
        data = [_menu("a", "A", "/a")]
        with patch("menu_service.requests.get", return_value=self._response({"code": 200, "data": data})) as get:
            fetch_backend_menus("http://api.local", token="one")
            fetch_backend_menus("http://api.local", token="two")

        assert get.call_count == 2

    def test_failures_are_not_cached(self):
        data = [_menu("a", "A", "/a")]
        responses = [requests.ConnectionError("down"), self._response({"code": 200, "data": data})]
        with patch("menu_service.requests.get", side_effect=responses) as get:
            assert fetch_backend_menus("http://api.local") is None
            assert fetch_backend_menus("http://api.local") == data

        assert get.call_count == 2


class TestFlattenRoutes:

    def test_leaves_of_a_three_level_tree(self):
        tree = transform_user_menus([
            _menu("system", "系统管理", "/system", children=[
                _menu("org", "Org", "/system/org", children=[
                    _menu("deep", "Deep", "/system/org/deep"),
                ]),
                _menu("u", "用户管理", "/system/user-management"),
            ]),
        ])

        assert [m["key"] for m in flatten_routes(tree)] == ["deep", "u"]

    def test_leaf_is_its_own_entry(self):
        tree = transform_user_menus([_menu("home", "首页", "/welcome")])

        assert [m["key"] for m in flatten_routes(tree)] == ["home"]
