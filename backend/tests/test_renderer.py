"""Tests for code rendering."""

from datetime import datetime

from idlogic.services.renderer import render_code

NOW = datetime(2025, 11, 4)


class TestRenderCode:
    def test_full_format(self):
        code = render_code("{PREFIX}-{YYYY}-{MM}-{#####}", {"PREFIX": "EMP"}, NOW, 1, 5)
        assert code == "EMP-2025-11-00001"

    def test_date_placeholders(self):
        assert render_code("{YY}{MM}{DD}-{#}", None, NOW, 7, 3) == "251104-007"

    def test_pad_length_wins_over_hash_count(self):
        assert render_code("X-{###}", None, NOW, 42, 6) == "X-000042"
        assert render_code("X-{#######}", None, NOW, 42, 2) == "X-42"

    def test_number_wider_than_pad(self):
        assert render_code("{#}", None, NOW, 123456, 3) == "123456"

    def test_every_sequence_placeholder_replaced(self):
        assert render_code("{##}/{####}", None, NOW, 5, 2) == "05/05"

    def test_date_placeholders_resolved_before_data(self):
        assert render_code("{YYYY}", {"YYYY": "override"}, NOW, 1, 1) == "2025"

    def test_null_value_becomes_empty(self):
        assert render_code("{A}-{B}-{#}", {"A": "x", "B": None}, NOW, 1, 2) == "x-01"

    def test_unresolved_placeholder_becomes_empty(self):
        assert render_code("{BRANCH}-{YYYY}-{#}", {}, NOW, 1, 2) == "2025-01"
        assert render_code("{BRANCH}-{YYYY}-{#}", None, NOW, 1, 2) == "2025-01"

    def test_keys_with_regex_characters(self):
        assert render_code("{A.B}-{#}", {"A.B": "ok"}, NOW, 3, 1) == "ok-3"

    def test_value_is_not_substituted_again(self):
        assert render_code("{A}-{#}", {"A": "{B}", "B": "no"}, NOW, 1, 1) == "{B}-1"


class TestSeparatorNormalization:
    def test_collapses_repeated_dashes(self):
        code = render_code("{A}--{B}---{C}-{#}", {"A": "a", "B": "", "C": "c"}, NOW, 1, 1)
        assert code == "a-c-1"

    def test_trims_leading_and_trailing(self):
        code = render_code("{A}-{#}-{B}", {"A": "", "B": ""}, NOW, 9, 2)
        assert code == "09"

    def test_no_dash_artifacts_when_everything_is_empty(self):
        code = render_code("{A}-{B}-{C}", {"A": None}, NOW, 1, 1)
        assert "--" not in code
        assert not code.startswith("-")
        assert not code.endswith("-")
