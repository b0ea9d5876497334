"""Tests for the rule primitives, URL validation and the CLI."""

import json

import pytest

from salespage.cli import main
from salespage.rules import PatternRule, collect_matches, first_match
from salespage.url_validation import URLValidationError, is_safe_url, sanitize_url, validate_url


class TestPatternRule:
    def test_try_match_returns_group(self):
        rule = PatternRule.compile("h2", r"<h2>([^<]+)</h2>")
        assert rule.try_match("<h2> Oi </h2>") == "Oi"

    def test_try_match_none_when_absent(self):
        rule = PatternRule.compile("h2", r"<h2>([^<]+)</h2>")
        assert rule.try_match("<p>nada</p>") is None

    def test_group_zero_is_whole_match(self):
        rule = PatternRule.compile("brl", r"R\$\s*\d+", group=0)
        assert rule.try_match("por R$ 10 hoje") == "R$ 10"

    def test_find_all_in_document_order(self):
        rule = PatternRule.compile("li", r"<li>([^<]+)</li>")
        assert list(rule.find_all("<li>a</li><li> </li><li>b</li>")) == ["a", "b"]


class TestRuleCombinators:
    RULES = (
        PatternRule.compile("first", r"<b>([^<]+)</b>"),
        PatternRule.compile("second", r"<i>([^<]+)</i>"),
    )

    def test_first_match_stops_at_first_rule(self):
        assert first_match(self.RULES, "<i>italic</i><b>bold</b>") == "bold"

    def test_first_match_falls_through(self):
        assert first_match(self.RULES, "<i>italic</i>") == "italic"

    def test_first_match_none(self):
        assert first_match(self.RULES, "plain") is None

    def test_collect_matches_respects_limit_and_filter(self):
        text = "<b>aa</b><b>bbbb</b><i>cccc</i><i>dddd</i>"
        found = collect_matches(self.RULES, text, limit=2, accept=lambda v: len(v) > 2)
        assert found == ["bbbb", "cccc"]


class TestUrlValidation:
    def test_sanitize_strips_control_chars(self):
        assert sanitize_url(" https://a.com/x\n\x00 ") == "https://a.com/x"

    @pytest.mark.parametrize("url", ["https://exemplo.com", "http://loja.com.br/oferta?x=1"])
    def test_valid(self, url):
        assert validate_url(url) == url

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "javascript:alert(1)",
            "file:///etc/passwd",
            "ftp://exemplo.com",
            "exemplo.com/sem-esquema",
            "https://",
            "http://localhost:3000/",
            "http://127.0.0.1/admin",
            "http://10.0.0.5/",
        ],
    )
    def test_invalid(self, url):
        with pytest.raises(URLValidationError):
            validate_url(url)

    def test_private_allowed_when_requested(self):
        assert validate_url("http://127.0.0.1:8000/", allow_private=True) == "http://127.0.0.1:8000/"

    def test_is_safe_url(self):
        assert is_safe_url("https://exemplo.com")
        assert not is_safe_url("data:text/html,oi")


class TestCli:
    def test_json_output_from_html_file(self, tmp_path, capsys):
        page = tmp_path / "pagina.html"
        page.write_text("<title>Curso CLI</title><button>Entrar</button>", encoding="utf-8")

        exit_code = main(["https://exemplo.com", "--html-file", str(page), "--json"])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert payload["source"] == "extracted"
        assert payload["title"] == "Curso CLI"
        assert payload["cta"] == "Entrar"
        assert payload["url"] == "https://exemplo.com"

    def test_degraded_exit_code(self, capsys):
        exit_code = main(["not-a-url"])
        out = capsys.readouterr().out
        assert exit_code == 1
        assert "defaulted" in out
        assert "Produto Incrível" in out
