import pytest

from poseview.cli import Cli, HelpRequested, build_url, help_text, parse_args


def test_defaults():
    cli = parse_args([])
    assert cli == Cli()
    assert cli.viewer_addr == "127.0.0.1:9876"
    assert cli.enable_rerun is True
    assert cli.threads == 3
    assert cli.path == ""


@pytest.mark.parametrize("value", ["false", "FALSE", "False", "0"])
def test_enable_rerun_disabled(value):
    assert parse_args(["--enable_rerun", value]).enable_rerun is False


@pytest.mark.parametrize("value", ["true", "yes", "1"])
def test_enable_rerun_other_values_keep_enabled(value):
    assert parse_args(["--enable_rerun", value]).enable_rerun is True


def test_enable_rerun_cannot_be_turned_back_on():
    cli = parse_args(["--enable_rerun", "false", "--enable_rerun", "true"])
    assert cli.enable_rerun is False


def test_enable_rerun_prints_option(capsys):
    parse_args(["--enable_rerun", "0"])
    assert "CLI OPTION SET: Rerun enabled = false" in capsys.readouterr().out


def test_viewer_addr():
    assert parse_args(["--viewer_addr", "10.1.2.3:4000"]).viewer_addr == "10.1.2.3:4000"


@pytest.mark.parametrize(
    "value, expected", [("5", 5), ("7x", 7), ("abc", 0), ("  12", 12)]
)
def test_threads_parsed_like_atoi(value, expected):
    assert parse_args(["--threads", value]).threads == expected


def test_option_without_value_is_ignored():
    assert parse_args(["--threads"]).threads == Cli().threads
    assert parse_args(["--viewer_addr"]).viewer_addr == Cli().viewer_addr


def test_unknown_arguments_are_ignored():
    assert parse_args(["--bogus", "value", "extra"]) == Cli()


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_raises(flag):
    with pytest.raises(HelpRequested):
        parse_args(["--threads", "2", flag])


def test_option_value_is_also_examined():
    with pytest.raises(HelpRequested):
        parse_args(["--viewer_addr", "--help"])


def test_help_text_lists_options():
    text = help_text()
    assert text.startswith("Usage: measure [OPTIONS]\n")
    for option in ("--help", "--enable_rerun", "--viewer_addr", "--threads"):
        assert option in text


def test_build_url():
    assert build_url("127.0.0.1:9876") == "rerun+http://127.0.0.1:9876/proxy"


def test_build_url_truncates_host():
    url = build_url("a" * 30)
    assert url == "rerun+http://" + "a" * 18 + "/proxy"
    assert len(url) <= 37