"""Unit tests for path grammar and title extraction."""

import pytest
from pydantic import ValidationError

from plainwiki.core.models import Page
from plainwiki.core.validation import ParsedPath, is_valid_title, parse_path


class TestParsePath:
    @pytest.mark.parametrize("action", ["view", "edit", "save"])
    def test_known_actions(self, action):
        assert parse_path(f"/{action}/FrontPage") == ParsedPath(action, "FrontPage")

    def test_digits_and_mixed_case(self):
        parsed = parse_path("/view/Page42abc")
        assert parsed.action == "view"
        assert parsed.title == "Page42abc"

    @pytest.mark.parametrize(
        "path",
        [
            "/view/",
            "/view",
            "/view/Bad..Title",
            "/view/a.txt",
            "/view/a/b",
            "/view/../etc/passwd",
            "/view/two words",
            "/view/under_score",
            "/view/dash-ed",
            "/view/Café",
            "/view/Title\n",
            "/delete/FrontPage",
            "/VIEW/FrontPage",
            "view/FrontPage",
            "/view/FrontPage/",
            "",
        ],
    )
    def test_rejected_paths(self, path):
        assert parse_path(path) is None


class TestIsValidTitle:
    def test_valid(self):
        assert is_valid_title("Alpha")
        assert is_valid_title("123")

    @pytest.mark.parametrize("title", ["", "a b", "a/b", "a.b", "..", "über"])
    def test_invalid(self, title):
        assert not is_valid_title(title)


class TestPageModel:
    def test_default_body_is_empty(self):
        page = Page(title="New")
        assert page.body == b""
        assert page.text == ""

    def test_text_decodes_utf8(self):
        page = Page(title="Uni", body="héllo".encode("utf-8"))
        assert page.text == "héllo"

    def test_text_replaces_invalid_bytes(self):
        page = Page(title="Bin", body=b"ok\xff")
        assert page.text == "ok�"

    @pytest.mark.parametrize("title", ["", "../etc", "a.txt", "with space"])
    def test_invalid_title_rejected(self, title):
        with pytest.raises(ValidationError):
            Page(title=title)
