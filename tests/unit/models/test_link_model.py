from decimal import Decimal

import pytest

from tinylink.models import LinkModel


def test_to_dict_omits_unset_ttl() -> None:
    link = LinkModel(shortcode='Ab12', url='https://example.com', created_time=1700000000000)

    assert link.to_dict() == {
        'shortCode': 'Ab12',
        'submitter': 'anon',
        'url': 'https://example.com',
        'createdTime': 1700000000000,
    }


def test_to_dict_includes_ttl_when_set() -> None:
    link = LinkModel(shortcode='Ab12', url='https://example.com', created_time=1700000000000, submitter='bob', ttl=1800000000)

    record = link.to_dict()
    assert record['ttl'] == 1800000000
    assert record['submitter'] == 'bob'


def test_from_dict_coerces_dynamodb_decimals() -> None:
    record = {
        'shortCode': 'Ab12',
        'submitter': 'bob',
        'url': 'https://example.com',
        'createdTime': Decimal('1700000000000'),
        'ttl': Decimal('1800000000'),
    }

    link = LinkModel.from_dict(record)

    assert link == LinkModel(shortcode='Ab12', url='https://example.com', created_time=1700000000000, submitter='bob', ttl=1800000000)
    assert isinstance(link.created_time, int)
    assert isinstance(link.ttl, int)


def test_from_dict_defaults_missing_submitter() -> None:
    link = LinkModel.from_dict({'shortCode': 'Ab12', 'url': 'https://example.com', 'createdTime': 1})
    assert link.submitter == 'anon'
    assert link.ttl is None


def test_from_dict_requires_short_code() -> None:
    with pytest.raises(KeyError):
        LinkModel.from_dict({'url': 'https://example.com', 'createdTime': 1})


@pytest.mark.parametrize(
    'ttl, now, expected',
    [
        (None, 2_000_000_000, False),
        (1_000, 999, False),
        (1_000, 1_000, True),
        (1_000, 1_001, True),
    ],
)
def test_expired(ttl: int | None, now: int, expected: bool) -> None:
    link = LinkModel(shortcode='Ab12', url='https://example.com', created_time=1, ttl=ttl)
    assert link.expired(now) is expected


def test_link_is_immutable() -> None:
    link = LinkModel(shortcode='Ab12', url='https://example.com', created_time=1)
    with pytest.raises(AttributeError):
        link.url = 'https://evil.example.com'
