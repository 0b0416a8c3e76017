import shlex

import pytest

from qdbtools.cli.common.output import display_arg, display_command, out


def test_display_arg_leaves_plain_words_alone():
    assert display_arg("qdb-cli") == "qdb-cli"
    assert display_arg("--psql") == "--psql"
    assert display_arg("table_name") == "table_name"


def test_display_arg_keeps_sql_readable():
    assert display_arg('select count() from "orders";') == (
        "'select count() from \"orders\";'"
    )
    assert display_arg("SELECT table_name FROM tables WHERE table_name ~ 'x'") == (
        "\"SELECT table_name FROM tables WHERE table_name ~ 'x'\""
    )


def test_display_arg_empty_string():
    assert display_arg("") == "''"


@pytest.mark.parametrize(
    "cmd",
    [
        ["qdb-cli", "exec", "-q", 'select distinct ("status"), count() from "orders";', "--psql"],
        ["qdb-cli", "exec", "-q", "SELECT * FROM tables WHERE table_name ~ 'it''s'"],
        ["qdb-cli", "exec", "-q", 'show columns from "o\'brien"', "-x", "column"],
        ["qdb-cli", "--host", "", "exec", "-q", "select $1 from `x`"],
    ],
)
def test_display_command_is_valid_shell(cmd):
    assert shlex.split(display_command(cmd)) == cmd


def test_messages_go_to_stderr_with_markup_escaped(capsys):
    out.info("reading [tables]")
    out.warn("no regex")
    out.error("bad")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "› reading [tables]" in captured.err
    assert "⚠ no regex" in captured.err
    assert "✗ bad" in captured.err
