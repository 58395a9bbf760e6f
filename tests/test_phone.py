import pytest

from customers.utils import digits_only, normalize_phone


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("010-1234-5678", "010-1234-5678"),
        ("01012345678", "010-1234-5678"),
        ("010 1234 5678", "010-1234-5678"),
        ("011-123-4567", "011-1234-567"),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


@pytest.mark.parametrize("raw", ["", "1234", "02-123-4567", "020-1234-5678", "010-1234-56789", None])
def test_normalize_phone_rejects(raw):
    assert normalize_phone(raw) is None


def test_digits_only():
    assert digits_only("010-12 34.5678") == "01012345678"
    assert digits_only(None) == ""
