from datetime import date

from sponsorapp.utils.helpers import clean, parse_date, parse_level, flag, is_uuid


def test_clean():
    assert clean('  Acme ') == 'Acme'
    assert clean('   ') is None
    assert clean(None) is None


def test_parse_date():
    assert parse_date('2025-03-01') == date(2025, 3, 1)
    assert parse_date(' 2025-03-01 ') == date(2025, 3, 1)
    assert parse_date('2025-02-30') is None
    assert parse_date('') is None


def test_parse_level():
    assert parse_level('3') == 3
    assert parse_level('0') is None
    assert parse_level('1.5') is None
    assert parse_level(None) is None


def test_flag():
    assert flag({'fulfilled': 'true'}, 'fulfilled') is True
    assert flag({'fulfilled': 'on'}, 'fulfilled') is False
    assert flag({}, 'fulfilled') is False


def test_parse_date_rejects_trailing_text():
    assert parse_date('2025-03-01 junk') is None
    assert parse_date('2025-03-01T10:00') is None


def test_is_uuid():
    assert is_uuid('6f1c9f0e-2b7a-4c1e-9a53-0d2f6f9a1b11')
    assert not is_uuid('missing')
