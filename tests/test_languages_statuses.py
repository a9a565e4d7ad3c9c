import pytest

from app.features.judge0 import languages, statuses
from app.features.judge0.errors import UnsupportedLanguage
from app.features.judge0.statuses import DomainStatus


@pytest.mark.parametrize(
    "name, expected",
    [
        ("C", 50),
        ("C++", 54),
        ("Java", 62),
        ("Python", 71),
        ("JavaScript", 63),
        ("TypeScript", 74),
        ("Ruby", 72),
        ("Go", 60),
        ("Rust", 73),
    ],
)
def test_resolve_known_languages(name, expected):
    assert languages.resolve(name) == expected


@pytest.mark.parametrize("name", ["Perl", "python", "", "Python ", "Kotlin"])
def test_resolve_unknown_language(name):
    with pytest.raises(UnsupportedLanguage, match="Unsupported language"):
        languages.resolve(name)


def test_supported_languages_lists_table():
    table = {lang.name: lang.id for lang in languages.supported_languages()}
    assert table == languages.LANGUAGE_IDS


@pytest.mark.parametrize(
    "status_id, domain",
    [
        (1, DomainStatus.RUNNING),
        (2, DomainStatus.RUNNING),
        (3, DomainStatus.COMPLETED),
        (4, DomainStatus.FAILED),
        (5, DomainStatus.ERROR),
        (6, DomainStatus.ERROR),
        (7, DomainStatus.ERROR),
        (12, DomainStatus.ERROR),
        (13, DomainStatus.ERROR),
        (14, DomainStatus.ERROR),
        (99, DomainStatus.ERROR),
    ],
)
def test_domain_mapping(status_id, domain):
    assert statuses.to_domain(status_id) == domain


def test_descriptions():
    assert statuses.describe(3) == "Accepted"
    assert statuses.describe(5) == "Time Limit Exceeded"
    assert statuses.describe(11) == "Runtime Error (NZEC)"
    assert statuses.describe(42) == "Unknown"
    assert statuses.describe(None) == "Unknown"


def test_terminal_and_accepted():
    assert not statuses.is_terminal(1)
    assert not statuses.is_terminal(2)
    assert not statuses.is_terminal(None)
    assert all(statuses.is_terminal(sid) for sid in range(3, 15))
    assert statuses.is_accepted(3)
    assert not any(statuses.is_accepted(sid) for sid in range(4, 15))


def test_status_table_is_complete():
    table = statuses.status_table()
    assert [s.id for s in table] == list(range(1, 15))
