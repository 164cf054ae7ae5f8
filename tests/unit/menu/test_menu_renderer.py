"""Unit tests for usage rendering."""

import pytest
from rich.table import Table

from clibricks.modules.menu import (
    MenuEntry,
    OptionKind,
    ResolvedOptionSet,
    render_mandatory,
    render_option_table,
    render_optional,
    render_options,
    render_usage,
)

pytestmark = pytest.mark.unit


def _entry(display_name: str, kind: OptionKind) -> MenuEntry:
    name = display_name.lstrip("-")
    return MenuEntry(name, kind, prefix=display_name[: len(display_name) - len(name)])


def _set(mandatory=(), optional=()):
    return ResolvedOptionSet(
        mandatory=tuple(_entry(n, OptionKind.MANDATORY) for n in mandatory),
        optional=tuple(_entry(n, OptionKind.OPTIONAL) for n in optional),
    )


class TestGroups:
    def test_mandatory(self):
        assert render_mandatory(_set(["test1", "--test2"]).mandatory) == "[test1|--test2]"

    def test_optional(self):
        assert render_optional(_set(optional=["test5", "test6"]).optional) == "{test5|test6}"

    def test_empty_groups(self):
        assert render_mandatory([]) == ""
        assert render_optional([]) == ""
        assert render_options(ResolvedOptionSet()) == ""

    def test_only_optional_has_no_leading_space(self):
        assert render_options(_set(optional=["test4"])) == "{test4}"


class TestRenderUsage:
    def test_global_usage(self):
        option_set = _set(["test1", "--test2", "test3"], ["test5", "test6"])

        assert render_usage("test.sh", None, option_set) == "Usage: test.sh [test1|--test2|test3] {test5|test6}"

    def test_scoped_usage(self):
        option_set = _set(["--test1", "test2", "test3"])

        assert render_usage("test.sh", "test1", option_set) == "Usage: test.sh test1 [--test1|test2|test3]"

    def test_no_options(self):
        assert render_usage("test.sh", None, ResolvedOptionSet()) == "Usage: test.sh"
        assert render_usage("test.sh", "test9", ResolvedOptionSet()) == "Usage: test.sh test9"

    def test_groups_appear_only_when_non_empty(self):
        only_optional = render_usage("p", None, _set(optional=["x"]))

        assert only_optional.startswith("Usage: p")
        assert "[" not in only_optional
        assert "{x}" in only_optional


class TestOptionTable:
    def test_rows(self):
        option_set = ResolvedOptionSet(
            mandatory=(MenuEntry("env", OptionKind.MANDATORY, prefix="--", description="Target"),),
            optional=(MenuEntry("verbose", OptionKind.OPTIONAL),),
        )

        table = render_option_table(option_set, title="Options")

        assert isinstance(table, Table)
        assert table.row_count == 2
        assert list(table.columns[0].cells) == ["--env", "verbose"]
        assert list(table.columns[1].cells) == ["mandatory", "optional"]
        assert list(table.columns[2].cells) == ["Target", "-"]
