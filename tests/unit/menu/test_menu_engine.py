"""Tests for the Menu engine: validation, builders and help display.

Covers the behaviour shell scripts rely on when calling `clibricks menu`.
"""

import pytest

from clibricks.modules.menu import (
    Menu,
    MenuConfigMissingError,
    UnknownOptionError,
    declared_names,
    validate,
)

pytestmark = pytest.mark.unit


class TestValidate:
    """Tests for option validation."""

    def test_empty_candidate_always_valid(self, menu):
        for scope in (None, "test1", "test6", "missing"):
            menu.check_entry("", scope)
            menu.check_entry(None, scope)

    def test_declared_option(self, menu):
        menu.check_entry("test1")
        menu.check_entry("test6")

    def test_unknown_option(self, menu):
        with pytest.raises(UnknownOptionError, match="Option toto does not exist") as exc_info:
            menu.check_entry("toto")

        assert exc_info.value.option == "toto"

    def test_prefixed_form_is_not_a_name(self, menu):
        with pytest.raises(UnknownOptionError):
            menu.check_entry("--test2")

    def test_scope_limits_declared_names(self, menu):
        menu.check_entry("test4", "test6")

        with pytest.raises(UnknownOptionError):
            menu.check_entry("test4", "test1")

    def test_validate_matches_resolved_union(self, menu):
        for scope in (None, "test1", "test6"):
            names = set(menu.resolve(scope).names())
            assert declared_names(menu.entries, scope) == names
            for candidate in names:
                validate(menu.entries, scope, candidate)
            for candidate in {"test0", "test7", "TEST1"} - names:
                with pytest.raises(UnknownOptionError):
                    validate(menu.entries, scope, candidate)


class TestBuilders:
    """Tests for the usage fragment builders."""

    def test_build_mandatory_no_names(self, menu):
        assert menu.build_mandatory([]) == ""

    def test_build_mandatory_one(self, menu):
        assert menu.build_mandatory(["test1"]) == "[test1]"

    def test_build_mandatory_many(self, menu):
        assert menu.build_mandatory(["test1", "test2"]) == "[test1|--test2]"

    def test_build_mandatory_uses_scope_prefixes(self, menu):
        assert menu.build_mandatory(["test1", "test2"], "test1") == "[--test1|test2]"

    def test_build_mandatory_undeclared_name_is_bare(self, menu):
        assert menu.build_mandatory(["other"]) == "[other]"

    def test_build_skips_empty_names(self, menu):
        assert menu.build_mandatory(["", "test1"]) == "[test1]"
        assert menu.build_optional([""]) == ""

    def test_build_optional_no_names(self, menu):
        assert menu.build_optional([]) == ""

    def test_build_optional_one(self, menu):
        assert menu.build_optional(["test5"]) == "{test5}"

    def test_build_optional_many(self, menu):
        assert menu.build_optional(["test5", "test6"]) == "{test5|test6}"

    def test_build_cmd_opts(self, menu):
        assert menu.build_cmd_opts() == "[test1|--test2|test3|test4] {test5|test6}"

    def test_build_cmd_opts_with_exclusion_test1(self, menu):
        assert menu.build_cmd_opts(exclude_tag=".opts .test1") == "[--test1|test2|test3]"

    def test_build_cmd_opts_with_exclusion_test6(self, menu):
        assert menu.build_cmd_opts(exclude_tag=".opts .test6") == "[--test1|test2|test3] {test4}"


class TestDisplayHelp:
    """Tests for full usage lines."""

    def test_without_scope(self, menu):
        assert menu.display_help("test.sh") == "Usage: test.sh [test1|--test2|test3|test4] {test5|test6}"

    def test_with_scope_test1(self, menu):
        assert menu.display_help("test.sh", "test1") == "Usage: test.sh test1 [--test1|test2|test3]"

    def test_with_scope_test6(self, menu):
        assert menu.display_help("test.sh", "test6") == "Usage: test.sh test6 [--test1|test2|test3] {test4}"

    def test_menu_without_global_test4(self, tmp_path):
        menu_path = tmp_path / "menu.yml"
        menu_path.write_text(
            """
opts:
  test1: mandatory
  test2: {type: mandatory, prefix: "--"}
  test3: mandatory
  test5: optional
  test6: optional
"""
        )

        menu = Menu.load(menu_path)

        assert menu.display_help("test.sh") == "Usage: test.sh [test1|--test2|test3] {test5|test6}"


class TestEmptyMenu:
    """An empty menu file is valid and renders nothing."""

    def test_builders_are_empty(self, empty_menu_file):
        menu = Menu.load(empty_menu_file)

        assert menu.build_mandatory([]) == ""
        assert menu.build_optional([]) == ""
        assert menu.build_cmd_opts() == ""
        assert menu.build_cmd_opts(exclude_tag=".opts .test1") == ""
        assert menu.display_help("test.sh") == "Usage: test.sh"

    def test_empty_candidate_valid(self, empty_menu_file):
        Menu.load(empty_menu_file).check_entry("")

    def test_unknown_candidate_still_fails(self, empty_menu_file):
        with pytest.raises(UnknownOptionError, match="Option test1 does not exist"):
            Menu.load(empty_menu_file).check_entry("test1")


def test_load_missing_menu():
    with pytest.raises(MenuConfigMissingError, match="Please provide a menu configuration file"):
        Menu.load("")
