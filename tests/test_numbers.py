import pytest

from unixkit.numbers import NumberArgumentError, NumberFlags, get_int, get_long


def test_decimal_default():
    assert get_long("42") == 42
    assert get_long("-17") == -17
    assert get_long("+8") == 8


def test_leading_whitespace_is_accepted():
    assert get_long("  12") == 12


def test_trailing_garbage_rejected():
    with pytest.raises(NumberArgumentError) as info:
        get_long("12 ")
    assert info.value.msg == "nonnumeric characters"


@pytest.mark.parametrize("arg", ["", None])
def test_empty_rejected(arg):
    with pytest.raises(NumberArgumentError) as info:
        get_long(arg)
    assert info.value.msg == "null or empty string"


def test_any_base():
    assert get_long("0x1f", NumberFlags.ANY_BASE) == 0x1F
    assert get_long("017", NumberFlags.ANY_BASE) == 0o17
    assert get_long("99", NumberFlags.ANY_BASE) == 99


def test_any_base_rejects_bad_octal_and_bare_prefix():
    with pytest.raises(NumberArgumentError):
        get_long("089", NumberFlags.ANY_BASE)
    with pytest.raises(NumberArgumentError):
        get_long("0x", NumberFlags.ANY_BASE)


def test_explicit_bases():
    assert get_long("17", NumberFlags.BASE_8) == 0o17
    assert get_long("ff", NumberFlags.BASE_16) == 0xFF
    assert get_long("0xff", NumberFlags.BASE_16) == 0xFF
    with pytest.raises(NumberArgumentError):
        get_long("8", NumberFlags.BASE_8)


def test_any_base_takes_precedence():
    flags = NumberFlags.ANY_BASE | NumberFlags.BASE_16
    assert get_long("010", flags) == 0o10


def test_sign_checks():
    with pytest.raises(NumberArgumentError) as info:
        get_long("-5", NumberFlags.NONNEG)
    assert info.value.msg == "negative value not allowed"
    assert get_long("0", NumberFlags.NONNEG) == 0
    with pytest.raises(NumberArgumentError) as info:
        get_long("0", NumberFlags.GT_0)
    assert info.value.msg == "value must be > 0"


def test_long_range():
    assert get_long(str(-(2**63))) == -(2**63)
    assert get_long(str(2**63 - 1)) == 2**63 - 1
    with pytest.raises(NumberArgumentError) as info:
        get_long(str(2**63))
    assert info.value.msg == "strtol() failed"


def test_int_range():
    assert get_int(str(2**31 - 1)) == 2**31 - 1
    assert get_int(str(-(2**31))) == -(2**31)
    with pytest.raises(NumberArgumentError) as info:
        get_int(str(2**31))
    assert info.value.msg == "integer out of range"
    assert info.value.fname == "getInt"


def test_error_message_layout():
    with pytest.raises(NumberArgumentError) as info:
        get_int("abc", 0, "count")
    text = str(info.value)
    assert text.startswith("getInt error (in count): nonnumeric characters")
    assert text.endswith("offending text: abc")
    assert info.value.fname == "getInt"


def test_plain_int_flags_accepted():
    assert get_long("10", 0o400) == 16