import pytest

from blynkkit.options import DEFAULT_PORT, DEFAULT_SERVER, Options, parse_options


def test_token_only_uses_defaults():
    opts = parse_options(["-t", "token"])
    assert opts == Options(token="token", server=DEFAULT_SERVER, port=DEFAULT_PORT)


def test_long_options():
    opts = parse_options(["--token=token", "--server=example.com", "--port=8080"])
    assert opts.token == "token"
    assert opts.server == "example.com"
    assert opts.port == 8080


def test_short_options_with_custom_defaults():
    opts = parse_options(["-s", "localhost", "-t", "token"], default_server="example.com", default_port=9443)
    assert opts.server == "localhost"
    assert opts.port == 9443


def test_port_is_parsed_like_atoi():
    assert parse_options(["-t", "token", "-p", "8080abc"]).port == 8080
    assert parse_options(["-t", "token", "-p", "abc"]).port == 0


def test_missing_token_exits_with_usage(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_options(["-s", "example.com"])
    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert out.startswith("Usage: blynk [options]\n")
    assert f"(default: {DEFAULT_SERVER})" in out


def test_unknown_option_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_options(["-t", "token", "-x"])
    assert exc.value.code == 1
    assert "--token=auth" in capsys.readouterr().out


def test_missing_argument_exits():
    with pytest.raises(SystemExit) as exc:
        parse_options(["-t"])
    assert exc.value.code == 1


def test_reads_sys_argv(monkeypatch):
    monkeypatch.setattr("sys.argv", ["prog", "--token", "token", "-p", "443"])
    opts = parse_options()
    assert opts.token == "token"
    assert opts.port == 443