import pytest

from blynkkit.debug import format_dump, format_ip, format_log


def test_printable_bytes_pass_through():
    for byte in range(33, 127):
        assert format_dump("", bytes([byte])) == chr(byte)


@pytest.mark.parametrize("byte", [0, 10, 32, 127, 255])
def test_non_printable_is_bracketed_hex(byte):
    result = format_dump("", bytes([byte]))
    assert result[0] == "["
    assert result[-1] == "]"
    assert int(result[1:-1], 16) == byte
    assert len(result) == 4


def test_mixed_dump():
    assert format_dump(">> ", b"a\x01\x02b") == ">> a[01|02]b"


def test_empty_dump():
    assert format_dump(">> ", b"") == ""


def test_dump_keeps_prefix_and_text():
    text = b"vw\x001\x00"
    result = format_dump("<< ", text)
    assert result.startswith("<< vw")
    assert result.count("[") == result.count("]")


def test_format_log():
    assert format_log(1500, "Connecting to ", "host", ":", 80) == "[1500] Connecting to host:80"


def test_format_log_time_prefix():
    line = format_log(7, "msg")
    assert line.startswith("[7] ")
    assert line.endswith("msg")


def test_format_ip():
    assert format_ip((192, 168, 4, 1)) == "192.168.4.1"


def test_format_ip_reverse():
    octets = (10, 20, 30, 40)
    forward = format_ip(octets)
    assert format_ip(octets, reverse=True) == ".".join(reversed(forward.split(".")))