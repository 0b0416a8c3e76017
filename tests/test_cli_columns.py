from qdbtools.cli.commands.columns import app


def test_name_only_extracts_column_field(runner, fake_run):
    result = runner.invoke(app, ["--name-only", "trades"])

    assert result.exit_code == 0, result.output
    assert fake_run.calls == [
        ["qdb-cli", "exec", "-q", 'show columns from "trades"', "-x", "column"]
    ]


def test_full_table_by_default(runner, fake_run):
    result = runner.invoke(app, ["trades", "-n"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["trades"])
    assert result.exit_code == 0, result.output

    assert fake_run.calls[1] == [
        "qdb-cli",
        "exec",
        "-q",
        'show columns from "trades"',
        "--psql",
    ]


def test_missing_table_name(runner, fake_run):
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Missing argument 'table_name'" in result.output
    assert fake_run.calls == []


def test_too_many_arguments(runner, fake_run):
    result = runner.invoke(app, ["a", "b"])

    assert result.exit_code == 1
    assert fake_run.calls == []


def test_help(runner, fake_run):
    result = runner.invoke(app, ["-h"])

    assert result.exit_code == 0
    assert "--name-only" in result.output
    assert fake_run.calls == []


def test_global_client_args_from_environment(runner, fake_run, monkeypatch):
    monkeypatch.setenv("QDBTOOLS_CLI", "qdb")
    monkeypatch.setenv("QDBTOOLS_CLI_ARGS", "--host db1")

    result = runner.invoke(app, ["trades"])

    assert result.exit_code == 0, result.output
    assert fake_run.calls[0][:4] == ["qdb", "--host", "db1", "exec"]


def test_bad_environment_config_exits_1(runner, fake_run, monkeypatch):
    monkeypatch.setenv("QDBTOOLS_CLI_ARGS", "'unterminated")

    result = runner.invoke(app, ["trades"])

    assert result.exit_code == 1
    assert "QDBTOOLS_CLI_ARGS" in result.output
    assert fake_run.calls == []


def test_double_dash_allows_dash_prefixed_table(runner, fake_run):
    result = runner.invoke(app, ["--", "-weird"])

    assert result.exit_code == 0, result.output
    assert fake_run.calls == [
        ["qdb-cli", "exec", "-q", 'show columns from "-weird"', "--psql"]
    ]
