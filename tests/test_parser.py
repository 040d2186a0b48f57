"""Tests for HTML extraction and repository reference parsing."""

from cockpit.launch.parser import (
    extract_all_tag_content,
    extract_meta_content,
    extract_tag_content,
    extract_text_content,
    parse_repo_reference,
)

PAGE = """<!doctype html>
<html>
<head>
  <title>  Acme &amp; Co </title>
  <meta name="description" content="Ship faster">
  <style>body { color: red; }</style>
  <script>console.log("hidden")</script>
</head>
<body>
  <h1>Launch <em>today</em></h1>
  <h2>Fast</h2>
  <h2></h2>
  <h2>Cheap</h2>
  <!-- a comment -->
  <svg><text>icon</text></svg>
  <p>Build   things
  people want.</p>
</body>
</html>
"""


class TestExtractTagContent:
    def test_first_match_cleaned(self):
        assert extract_tag_content(PAGE, "title") == "Acme & Co"

    def test_nested_tags_stripped(self):
        assert extract_tag_content(PAGE, "h1") == "Launch today"

    def test_missing_tag(self):
        assert extract_tag_content(PAGE, "h3") == ""

    def test_all_matches_skip_empty(self):
        assert extract_all_tag_content(PAGE, "h2") == ["Fast", "Cheap"]


class TestExtractMetaContent:
    def test_name_before_content(self):
        assert extract_meta_content(PAGE, "description") == "Ship faster"

    def test_content_before_name(self):
        html = '<meta content="Reversed order" name="description" />'
        assert extract_meta_content(html, "description") == "Reversed order"

    def test_missing_meta(self):
        assert extract_meta_content("<html></html>", "description") == ""


class TestExtractTextContent:
    def test_scripts_styles_svg_and_comments_removed(self):
        text = extract_text_content(PAGE)

        assert "console.log" not in text
        assert "color: red" not in text
        assert "icon" not in text
        assert "a comment" not in text
        assert "Build things people want." in text


class TestParseRepoReference:
    def test_owner_repo(self):
        assert parse_repo_reference("acme/launchpad") == ("acme", "launchpad")

    def test_https_url(self):
        assert parse_repo_reference("https://github.com/acme/launchpad") == ("acme", "launchpad")

    def test_url_with_git_suffix_and_extra_path(self):
        assert parse_repo_reference("https://github.com/acme/launchpad.git") == ("acme", "launchpad")
        assert parse_repo_reference("github.com/acme/launchpad/tree/main") == ("acme", "launchpad")

    def test_ssh_url(self):
        assert parse_repo_reference("git@github.com:acme/launchpad.git") == ("acme", "launchpad")

    def test_other_host(self):
        assert parse_repo_reference("https://gitlab.com/acme/launchpad") is None

    def test_unparseable(self):
        assert parse_repo_reference(None) is None
        assert parse_repo_reference("   ") is None
        assert parse_repo_reference("just-a-name") is None
        assert parse_repo_reference("acme/launch pad") is None
