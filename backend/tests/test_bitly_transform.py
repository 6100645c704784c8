import uuid
from datetime import datetime, timezone

import pytest

from linkhub.services.imports.bitly_transform import build_links_from_record, parse_custom_bitlink, transform_page
from linkhub.services.imports.types import ImportRequest, SkipReason

WORKSPACE_ID = uuid.UUID('7f0c4bb0-3d53-4a36-9d0c-2b3f1e1c9a10')
USER_ID = uuid.UUID('2d8f4f61-1b7e-4bd4-8f7a-5a1d3f6c0e22')
FOLDER_ID = uuid.UUID('b1a6d2e9-1111-4c3a-9e7b-0f5d2c8a7e33')


def _request(**overrides) -> ImportRequest:
    values = {
        'workspace_id': WORKSPACE_ID,
        'user_id': USER_ID,
        'bitly_group': 'Bg1a2b3c',
        'domains': ('short.io', 'go.acme.com'),
        'api_key': 'bitly-token',
    }
    values.update(overrides)
    return ImportRequest(**values)


def _record(**overrides) -> dict:
    record = {
        'id': 'short.io/abc',
        'long_url': 'https://ex.com/landing',
        'title': 'Landing page',
        'archived': False,
        'created_at': '2021-04-08T11:37:10+0000',
        'custom_bitlinks': [],
        'tags': [],
    }
    record.update(overrides)
    return record


def test_build_links_normalizes_primary_link():
    links, skipped = build_links_from_record(_record(), _request(folder_id=FOLDER_ID))

    assert skipped == []
    assert len(links) == 1
    link = links[0]
    assert link.workspace_id == WORKSPACE_ID
    assert link.user_id == USER_ID
    assert link.domain == 'short.io'
    assert link.key == 'abc'
    assert link.url == 'https://ex.com/landing'
    assert link.short_link == 'https://short.io/abc'
    assert link.title == 'Landing page'
    assert link.archived is False
    assert link.created_at == datetime(2021, 4, 8, 11, 37, 10, tzinfo=timezone.utc)
    assert link.tag_ids == ()
    assert link.folder_id == FOLDER_ID


@pytest.mark.parametrize(
    'overrides',
    [
        {'id': None},
        {'id': ''},
        {'long_url': None},
        {'long_url': ''},
    ],
)
def test_records_without_id_or_url_produce_nothing(overrides):
    links, skipped = build_links_from_record(_record(**overrides), _request())

    assert links == []
    assert [item.reason for item in skipped] == [SkipReason.MISSING_FIELDS]


def test_record_with_missing_keys_is_skipped():
    links, skipped = build_links_from_record({'title': 'no id at all'}, _request())

    assert links == []
    assert skipped[0].reason == SkipReason.MISSING_FIELDS


def test_record_on_foreign_domain_is_skipped_even_with_valid_aliases():
    record = _record(id='bit.ly/abc', custom_bitlinks=['https://short.io/promo'])

    links, skipped = build_links_from_record(record, _request())

    assert links == []
    assert skipped[0].reason == SkipReason.FOREIGN_DOMAIN
    assert skipped[0].detail == 'bit.ly'


def test_record_without_key_is_skipped():
    links, skipped = build_links_from_record(_record(id='short.io'), _request())

    assert links == []
    assert skipped[0].reason == SkipReason.INVALID_ID


def test_malformed_record_is_skipped_not_raised():
    links, skipped = build_links_from_record(_record(created_at='not-a-date'), _request())

    assert links == []
    assert skipped[0].reason == SkipReason.INVALID_RECORD
    assert skipped[0].record_id == 'short.io/abc'


def test_custom_bitlinks_expand_only_for_claimed_domains():
    record = _record(
        custom_bitlinks=[
            'https://short.io/promo',
            'https://go.acme.com/spring-sale',
            'https://other.com/nope',
            'not a url',
        ],
        tags=['marketing'],
    )

    links, skipped = build_links_from_record(record, _request(tag_mapping={'marketing': 'tag-1'}))

    assert [link.short_link for link in links] == [
        'https://short.io/abc',
        'https://short.io/promo',
        'https://go.acme.com/spring-sale',
    ]
    alias = links[2]
    assert alias.domain == 'go.acme.com'
    assert alias.key == 'spring-sale'
    assert alias.url == links[0].url
    assert alias.title == links[0].title
    assert alias.tag_ids == ('tag-1',)
    assert [item.reason for item in skipped] == [SkipReason.FOREIGN_ALIAS_DOMAIN, SkipReason.INVALID_ALIAS]


def test_alias_without_path_maps_to_root_key():
    links, _skipped = build_links_from_record(_record(custom_bitlinks=['https://short.io']), _request())

    assert links[1].key == '_root'
    assert links[1].short_link == 'https://short.io'


def test_unmapped_tags_are_kept_as_none():
    record = _record(tags=['known', 'unknown'])

    links, _skipped = build_links_from_record(record, _request(tag_mapping={'known': 'tag-1'}))

    assert links[0].tag_ids == ('tag-1', None)


def test_url_and_title_are_sanitized():
    record = _record(long_url=r'https://ex.com/\u12', title=r'Sale \x9 now')

    links, _skipped = build_links_from_record(record, _request())

    assert links[0].url == r'https://ex.com/\\u12'
    assert links[0].title == r'Sale \\x9 now'


def test_missing_created_at_defaults_to_now():
    before = datetime.now(timezone.utc)
    links, _skipped = build_links_from_record(_record(created_at=None), _request())

    assert links[0].created_at >= before


def test_transform_page_aggregates_links_and_skips():
    records = [
        _record(),
        _record(id='short.io/def', custom_bitlinks=['https://go.acme.com/def']),
        _record(id='bit.ly/xyz'),
        _record(long_url=None),
    ]

    result = transform_page(records, _request())

    assert [link.short_link for link in result.links] == [
        'https://short.io/abc',
        'https://short.io/def',
        'https://go.acme.com/def',
    ]
    assert [item.reason for item in result.skipped] == [SkipReason.FOREIGN_DOMAIN, SkipReason.MISSING_FIELDS]


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('https://Short.IO/Promo', ('short.io', 'Promo')),
        ('https://short.io/a/b', ('short.io', 'a/b')),
        ('short.io/abc', None),
        ('https://', None),
    ],
)
def test_parse_custom_bitlink(value, expected):
    assert parse_custom_bitlink(value) == expected


def test_null_archived_and_loose_tags_keep_the_record():
    record = _record(archived=None, tags=['known', 7, None, ''])

    links, skipped = build_links_from_record(record, _request(tag_mapping={'known': 'tag-1', '7': 'tag-7'}))

    assert skipped == []
    assert links[0].archived is False
    assert links[0].tag_ids == ('tag-1', 'tag-7')
