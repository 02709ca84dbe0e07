"""Tests for tool name -> command path derivation."""

from tooldeck.tools.naming import command_path, split_camel_case, split_tool_name


def test_split_camel_case():
    assert split_camel_case("SiteConfig") == ["Site", "Config"]
    assert split_camel_case("Site") == ["Site"]


def test_split_tool_name_camel():
    assert split_tool_name("getSiteConfig") == ("get", ["Site", "Config"])


def test_split_tool_name_snake():
    assert split_tool_name("get_site_config") == ("get", ["site", "config"])


def test_split_tool_name_without_verb():
    assert split_tool_name("Site") == (None, [])
    assert split_tool_name("help") == (None, [])
    assert split_tool_name("get_") == (None, [])


class TestCommandPath:
    """Tests for the verb-last command path heuristic."""

    def test_one_word(self):
        assert command_path("addSite") == ("site", "add")

    def test_plural_word(self):
        assert command_path("listSites") == ("sites", "list")

    def test_two_words(self):
        assert command_path("getSiteConfig") == ("site", "config", "get")

    def test_no_verb_is_single_segment(self):
        assert command_path("help") == ("help",)
        assert command_path("Status") == ("status",)

    def test_snake_case(self):
        assert command_path("add_site") == ("site", "add")
        assert command_path("get_site_config") == ("site", "config", "get")

    def test_three_words_module_first_word(self):
        path = command_path("setSitePageTitle", module="site")
        assert path == ("site", "page", "title", "set")

    def test_three_words_compound_module(self):
        path = command_path("setSitePageTitle", module="site-page")
        assert path == ("site-page", "title", "set")

    def test_compound_module_with_underscore(self):
        path = command_path("set_site_page_title", module="site_page")
        assert path == ("site-page", "title", "set")

    def test_three_words_unrelated_module(self):
        path = command_path("setSitePageTitle", module="pages")
        assert path == ("site", "page", "title", "set")

    def test_module_ignored_for_short_names(self):
        assert command_path("getSiteConfig", module="site-config") == ("site", "config", "get")

    def test_collisions_are_possible(self):
        # Both map to the same path; registration decides which wins
        assert command_path("getSiteConfig") == command_path("get_site_config")
