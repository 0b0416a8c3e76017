import pytest

from qdbtools.cli.common.options import QUERY_SPEC, TABLES_SPEC
from qdbtools.core.flags import Flag, FlagSpec, UsageError, format_flags, parse_args

SPEC = FlagSpec(
    flags=(
        Flag("alpha", "--alpha", "-a", help="Alpha switch."),
        Flag("beta", "--beta", "-b", help="Beta switch."),
        Flag("items", "--items", "-i", takes_value=True, metavar="LIST"),
        Flag("count", "--count", "-c", takes_value=True, integer=True, metavar="N"),
        Flag("order", "--order", "-o", takes_value=True, value_optional=True),
    ),
    exclusive=(("alpha", "beta"),),
    max_positionals=1,
)


def test_parse_args_empty():
    parsed = parse_args([], SPEC)

    assert parsed.switches == frozenset()
    assert parsed.values == {}
    assert parsed.positionals == ()
    assert parsed.help is False


def test_parse_args_long_and_short_forms():
    short = parse_args(["-a", "-i", "x,y"], SPEC)
    long = parse_args(["--alpha", "--items", "x,y"], SPEC)

    assert short == long
    assert short.switch("alpha") is True
    assert short.value("items") == "x,y"


def test_parse_args_interleaves_flags_and_positional():
    parsed = parse_args(["-a", "pattern", "-c", "3"], SPEC)

    assert parsed.positionals == ("pattern",)
    assert parsed.value("count") == 3


def test_value_flag_followed_by_dash_token_has_absent_value():
    parsed = parse_args(["-i", "-a"], SPEC)

    assert parsed.has_value("items")
    assert parsed.value("items") is None
    assert parsed.switch("alpha") is True


def test_value_flag_at_end_has_absent_value():
    parsed = parse_args(["-o"], SPEC)

    assert parsed.has_value("order")
    assert parsed.value("order") is None


def test_long_flag_inline_value():
    parsed = parse_args(["--count=7", "--items=a,b"], SPEC)

    assert parsed.value("count") == 7
    assert parsed.value("items") == "a,b"


def test_switch_rejects_inline_value():
    with pytest.raises(UsageError, match="does not take a value"):
        parse_args(["--alpha=1"], SPEC)


@pytest.mark.parametrize("argv", [["-c", "abc"], ["-c", "1.5"], ["-c", "+3"], ["-c"]])
def test_integer_flag_rejects_non_numeric_or_missing(argv):
    with pytest.raises(UsageError, match="non-negative integer"):
        parse_args(argv, SPEC)


def test_integer_flag_with_negative_looking_value_is_missing():
    # "-5" is treated as a flag, so -c has no value
    with pytest.raises(UsageError, match="-c/--count requires a non-negative integer"):
        parse_args(["-c", "-5"], SPEC)


def test_unknown_flag_is_rejected():
    with pytest.raises(UsageError, match="Unknown option '--bogus'"):
        parse_args(["--bogus"], SPEC)


def test_exclusive_pair_is_rejected():
    with pytest.raises(UsageError, match="mutually exclusive"):
        parse_args(["-a", "--beta"], SPEC)


def test_repeating_a_flag_is_not_a_conflict():
    parsed = parse_args(["-a", "--alpha"], SPEC)

    assert parsed.switches == frozenset({"alpha"})


def test_first_violation_wins():
    with pytest.raises(UsageError, match="mutually exclusive"):
        parse_args(["-a", "-b", "--bogus"], SPEC)
    with pytest.raises(UsageError, match="Unknown option"):
        parse_args(["--bogus", "-a", "-b"], SPEC)


def test_too_many_positionals():
    with pytest.raises(UsageError, match="Too many arguments"):
        parse_args(["one", "two"], SPEC)


def test_help_short_circuits_everything():
    parsed = parse_args(["--bogus", "-a", "-b", "-h"], SPEC)

    assert parsed.help is True
    assert parsed.switches == frozenset()


def test_double_dash_ends_flag_processing():
    parsed = parse_args(["--", "-weird"], SPEC)

    assert parsed.positionals == ("-weird",)


def test_lone_dash_is_positional():
    parsed = parse_args(["-"], SPEC)

    assert parsed.positionals == ("-",)


def test_last_value_wins_for_repeated_value_flag():
    parsed = parse_args(["-i", "a", "-i", "b"], SPEC)

    assert parsed.value("items") == "b"


def test_tables_spec_exclusive_pairs():
    for pair in (["-u", "-U"], ["-t", "-T"], ["-d", "-D"]):
        with pytest.raises(UsageError, match="mutually exclusive"):
            parse_args(pair, TABLES_SPEC)


def test_query_spec_allows_table_and_column():
    parsed = parse_args(["-d", "orders", "status", "-n"], QUERY_SPEC)

    assert parsed.positionals == ("orders", "status")
    assert parsed.switch("distinct")
    assert parsed.switch("dry_run")


def test_format_flags_lists_every_flag():
    text = format_flags(SPEC)

    assert "-a, --alpha" in text
    assert "-i, --items LIST" in text
    assert "-o, --order [ORDER]" in text
    assert "-h, --help" in text
