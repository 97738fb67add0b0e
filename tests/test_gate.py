"""Tests for access decisions."""

import pytest

from content_protector.gate import (
    FULL_PROMPT,
    GLOBAL_COOKIE,
    ITEM_PROMPT,
    SESSION_MAX_AGE,
    AccessGate,
    item_cookie_name,
)
from content_protector.rules import resolve


@pytest.fixture
def gate():
    return AccessGate()


@pytest.fixture
def full_config():
    return resolve("full", "", "", "secret")


@pytest.fixture
def selected_config():
    return resolve("selected", "7:pw, about-us:secret", "", "unused")


class TestFullMode:
    def test_correct_password_grants(self, gate, full_config):
        decision = gate.evaluate(full_config, submitted_password="secret", request_uri="/page?x=1")
        assert decision.action == "grant"
        assert decision.cookie_name == GLOBAL_COOKIE
        assert decision.redirect_to == "/page?x=1"
        assert decision.max_age == SESSION_MAX_AGE

    def test_wrong_password_prompts(self, gate, full_config):
        decision = gate.evaluate(full_config, submitted_password="wrong")
        assert decision.action == "prompt"
        assert decision.message == FULL_PROMPT

    def test_password_is_case_sensitive(self, gate, full_config):
        decision = gate.evaluate(full_config, submitted_password="SECRET")
        assert decision.action == "prompt"

    def test_no_cookie_prompts(self, gate, full_config):
        decision = gate.evaluate(full_config)
        assert decision.action == "prompt"

    def test_cookie_allows(self, gate, full_config):
        decision = gate.evaluate(full_config, cookies={GLOBAL_COOKIE: "1"})
        assert decision.allowed

    def test_cookie_value_is_not_checked(self, gate, full_config):
        decision = gate.evaluate(full_config, cookies={GLOBAL_COOKIE: "anything"})
        assert decision.allowed

    def test_stale_cookie_wins_over_wrong_password(self, gate, full_config):
        decision = gate.evaluate(
            full_config,
            submitted_password="wrong",
            cookies={GLOBAL_COOKIE: "1"},
        )
        assert decision.allowed

    def test_correct_password_with_cookie_grants_again(self, gate, full_config):
        decision = gate.evaluate(
            full_config,
            submitted_password="secret",
            cookies={GLOBAL_COOKIE: "1"},
        )
        assert decision.action == "grant"

    def test_full_mode_ignores_item_cookies(self, gate, full_config):
        decision = gate.evaluate(full_config, content_id=7, cookies={item_cookie_name(7): "1"})
        assert decision.action == "prompt"

    def test_empty_default_password_matches_empty_submission(self, gate):
        config = resolve(None, None, None, None)
        assert gate.evaluate(config, submitted_password="").action == "grant"
        assert gate.evaluate(config).action == "prompt"

    def test_custom_session_lifetime(self, full_config):
        decision = AccessGate(session_max_age=60).evaluate(full_config, submitted_password="secret")
        assert decision.max_age == 60


class TestSelectedMode:
    def test_protected_item_prompts(self, gate, selected_config):
        decision = gate.evaluate(selected_config, content_id=7)
        assert decision.action == "prompt"
        assert decision.message == ITEM_PROMPT
        assert decision.cookie_name == "pd_protector_access_7"

    def test_protected_item_with_cookie_allows(self, gate, selected_config):
        decision = gate.evaluate(selected_config, content_id=7, cookies={"pd_protector_access_7": "1"})
        assert decision.allowed

    def test_unmatched_item_always_allowed(self, gate, selected_config):
        assert gate.evaluate(selected_config, content_id=8).allowed
        assert gate.evaluate(selected_config, content_id=8, submitted_password="pw").allowed
        assert gate.evaluate(selected_config, content_id=8, cookies={"pd_protector_access_7": "1"}).allowed

    def test_no_content_is_not_gated(self, gate, selected_config):
        assert gate.evaluate(selected_config).allowed

    def test_correct_password_grants_item_cookie(self, gate, selected_config):
        decision = gate.evaluate(selected_config, content_id=7, submitted_password="pw", request_uri="/content/7")
        assert decision.action == "grant"
        assert decision.cookie_name == "pd_protector_access_7"
        assert decision.redirect_to == "/content/7"

    def test_global_password_does_not_unlock_item(self, gate, selected_config):
        decision = gate.evaluate(selected_config, content_id=7, submitted_password="unused")
        assert decision.action == "prompt"

    def test_slug_match_uses_id_cookie(self, gate, selected_config):
        decision = gate.evaluate(selected_config, content_id=3, content_slug="about-us", submitted_password="secret")
        assert decision.action == "grant"
        assert decision.cookie_name == "pd_protector_access_3"

    def test_cookie_for_other_item_does_not_allow(self, gate, selected_config):
        decision = gate.evaluate(selected_config, content_id=7, cookies={"pd_protector_access_3": "1"})
        assert decision.action == "prompt"

    def test_global_cookie_does_not_allow_item(self, gate, selected_config):
        decision = gate.evaluate(selected_config, content_id=7, cookies={GLOBAL_COOKIE: "1"})
        assert decision.action == "prompt"

    def test_stale_cookie_wins_over_wrong_password(self, gate, selected_config):
        decision = gate.evaluate(
            selected_config,
            content_id=7,
            submitted_password="wrong",
            cookies={"pd_protector_access_7": "1"},
        )
        assert decision.allowed

    def test_slug_match_without_id_uses_zero_cookie(self, gate, selected_config):
        decision = gate.evaluate(selected_config, content_slug="about-us")
        assert decision.cookie_name == "pd_protector_access_0"


def test_evaluation_is_idempotent(gate, selected_config):
    cookies = {"pd_protector_access_3": "1"}
    first = gate.evaluate(selected_config, content_id=7, cookies=cookies)
    second = gate.evaluate(selected_config, content_id=7, cookies=cookies)
    assert first == second
    assert cookies == {"pd_protector_access_3": "1"}
