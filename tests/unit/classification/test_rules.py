"""Tests for the static rule tables."""

import re

import pytest

from clip_classifier_mcp.classification import (
    LANGUAGE_RULES,
    STRUCTURAL_RULES,
    LanguageRule,
    ScoringRule,
)


class TestScoringRule:
    """Test the ScoringRule model."""

    def test_count_matches_is_non_overlapping(self):
        rule = ScoringRule(re.compile("aa"), 1)
        assert rule.count_matches("aaaaa") == 2

    def test_count_matches_ignores_groups(self):
        rule = ScoringRule(re.compile(r"(a)(b)?"), 1)
        assert rule.count_matches("a ab a") == 3

    def test_rules_are_immutable(self):
        rule = ScoringRule(re.compile("x"), 1)
        with pytest.raises(AttributeError):
            rule.weight = 5


class TestLanguageRule:
    """Test the LanguageRule model."""

    def test_score_sums_all_patterns(self):
        rule = LanguageRule("demo", (re.compile("x"), re.compile("y")))
        assert rule.score("x y x") == 3


class TestStructuralRules:
    """Spot checks of individual structural rules."""

    def _matching(self, text):
        return [rule for rule in STRUCTURAL_RULES if rule.count_matches(text)]

    def test_weights_are_positive(self):
        assert all(rule.weight > 0 for rule in STRUCTURAL_RULES)

    def test_discounted_weights(self):
        """Indentation runs and hash comments count half."""
        weights = {rule.pattern.pattern: rule.weight for rule in STRUCTURAL_RULES}
        assert weights[r"^\s{2,}\w+"] == 0.5
        assert weights[r"#.*$"] == 0.5

    @pytest.mark.parametrize(
        "text",
        [
            "const total",
            "items.filter(",
            "() =>",
            "public static",
            "System.out.println",
            "</div>",
            "className='x'",
            "@media screen",
            "#!/usr/bin/env",
            "curl https://example.com",
            "/* block */",
        ],
    )
    def test_code_signals_match(self, text):
        assert self._matching(text), f"No structural rule matched {text!r}"

    def test_keyword_rule_is_case_insensitive_for_types(self):
        assert self._matching("String name")

    def test_sql_statement_rule_requires_upper_case(self):
        statement = next(
            rule for rule in STRUCTURAL_RULES if rule.weight == 6
        )
        assert statement.count_matches("SELECT * FROM users") == 1
        assert statement.count_matches("select a date from the calendar") == 0

    def test_json_key_lines(self):
        key_rule = next(
            rule for rule in STRUCTURAL_RULES if rule.pattern.pattern.startswith(r'^\s*\"[')
        )
        assert key_rule.count_matches('{\n  "a": 1,\n  "b": 2\n}') == 2


class TestLanguageRules:
    """Checks of the language table."""

    def test_language_order(self):
        assert [rule.language for rule in LANGUAGE_RULES] == [
            "javascript", "typescript", "python", "html", "css", "json", "sql", "bash",
        ]

    def test_every_language_has_patterns(self):
        assert all(rule.patterns for rule in LANGUAGE_RULES)

    @pytest.mark.parametrize(
        "language, text",
        [
            ("javascript", "promise.then(done).catch(fail)"),
            ("typescript", "let id: number"),
            ("python", "if __name__ == '__main__':"),
            ("html", "<!DOCTYPE html>"),
            ("css", "@media (max-width: 600px)"),
            ("json", '{"key": "value"}'),
            ("sql", "CREATE TABLE users"),
            ("bash", "source ~/.bashrc"),
        ],
    )
    def test_characteristic_patterns(self, language, text):
        rule = next(rule for rule in LANGUAGE_RULES if rule.language == language)
        assert rule.score(text) > 0
