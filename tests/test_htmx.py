"""Tests for viewkit.htmx: request detection and response headers."""

import json

from viewkit import htmx
from viewkit.htmx import HtmxResponse
from viewkit.http.request import Request
from viewkit.http.writer import ResponseWriter


class TestRequestSide:
    def test_plain_request(self) -> None:
        request = Request.build("/")
        assert htmx.is_htmx_request(request) is False
        assert htmx.is_boosted_request(request) is False
        assert htmx.htmx_target(request) == ""
        assert htmx.htmx_trigger(request) == ""
        assert htmx.htmx_trigger_name(request) == ""
        assert htmx.htmx_current_url(request) == ""
        assert htmx.htmx_prompt(request) == ""

    def test_only_literal_true_counts(self) -> None:
        assert htmx.is_htmx_request(Request.build("/", headers={"HX-Request": "1"})) is False
        assert htmx.is_htmx_request(Request.build("/", headers={"HX-Request": "true"})) is True

    def test_accessors(self) -> None:
        request = Request.build("/", headers={
            "HX-Boosted": "true",
            "HX-Target": "main",
            "HX-Trigger": "nav-link",
            "HX-Trigger-Name": "next",
            "HX-Current-URL": "http://x/games",
            "HX-Prompt": "sure",
        })
        assert htmx.is_boosted_request(request) is True
        assert htmx.htmx_target(request) == "main"
        assert htmx.htmx_trigger(request) == "nav-link"
        assert htmx.htmx_trigger_name(request) == "next"
        assert htmx.htmx_current_url(request) == "http://x/games"
        assert htmx.htmx_prompt(request) == "sure"


class TestHtmxResponse:
    def test_trigger_name(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).trigger("gameSaved")
        assert w.get_header("HX-Trigger") == "gameSaved"

    def test_trigger_dict_and_data(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).trigger_with_data("showToast", {"message": "Saved!"})
        assert json.loads(w.get_header("HX-Trigger")) == {"showToast": {"message": "Saved!"}}

    def test_trigger_phases(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).trigger_after_settle("settled").trigger_after_swap({"swapped": 1})
        assert w.get_header("HX-Trigger-After-Settle") == "settled"
        assert json.loads(w.get_header("HX-Trigger-After-Swap")) == {"swapped": 1}

    def test_last_write_wins(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).trigger("a").trigger("b")
        assert w.headers == (("HX-Trigger", "b"),)

    def test_navigation_headers(self) -> None:
        w = ResponseWriter()
        (
            HtmxResponse(w)
            .redirect("/login")
            .refresh()
            .push_url("/games/42")
            .replace_url(False)
            .retarget("#rows")
            .reswap("outerHTML")
            .reselect("#content")
        )
        assert w.get_header("HX-Redirect") == "/login"
        assert w.get_header("HX-Refresh") == "true"
        assert w.get_header("HX-Push-Url") == "/games/42"
        assert w.get_header("HX-Replace-Url") == "false"
        assert w.get_header("HX-Retarget") == "#rows"
        assert w.get_header("HX-Reswap") == "outerHTML"
        assert w.get_header("HX-Reselect") == "#content"
        assert w.committed is False

    def test_push_url_true(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).push_url(True)
        assert w.get_header("HX-Push-Url") == "true"

    def test_location_plain(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).location("/games")
        assert w.get_header("HX-Location") == "/games"

    def test_location_with_options(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).location("/games", target="#main", swap="innerHTML")
        assert json.loads(w.get_header("HX-Location")) == {
            "path": "/games",
            "target": "#main",
            "swap": "innerHTML",
        }

    def test_location_with_context(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).location_with_context({"path": "/x", "values": {"a": 1}})
        assert json.loads(w.get_header("HX-Location"))["values"] == {"a": 1}

    def test_stop_polling(self) -> None:
        w = ResponseWriter()
        HtmxResponse(w).stop_polling()
        assert w.status == htmx.STOP_POLLING_STATUS == 286
        assert w.committed is True
