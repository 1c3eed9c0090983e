"""Tests running INSERT_RECORD_SCRIPT on a Lua-capable fake Redis

The other DAO tests mock the registered script. These run it for real
through fakeredis, so the conditional insert and the SET NX indexes are
exercised as Redis would execute them.

Test coverage includes:

1. Conditional insert
   - A taken code raises UniquenessViolationError and leaves the store untouched.
   - Record and index are written together.

2. Lookup index
   - A second code for the same URL does not move the index off the first.

3. Get-or-create over Redis
   - Repeated calls return one code and commit one record.
"""

import json
import re

import fakeredis
import pytest

from shortlinks.allocation import ShortLinkService
from shortlinks.dao.exceptions import UniquenessViolationError
from shortlinks.dao.redis import RecordStoreRedisDAO


RECORD_KEY = 'testapp:test:records:short_links:{}'
INDEX_KEY = 'testapp:test:index:short_links:target_url:{}'


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def dao(redis_client):
    return RecordStoreRedisDAO(redis_client=redis_client, prefix='testapp:test')


# -------------------------------
# 1. Conditional insert
# -------------------------------


def test_insert_writes_record_and_index(dao, redis_client):
    record = {'code': 'abc123', 'target_url': 'https://example.com/a'}

    dao.insert('short_links', record)

    assert json.loads(redis_client.get(RECORD_KEY.format('abc123'))) == record
    assert redis_client.get(INDEX_KEY.format('https://example.com/a')) == 'abc123'


def test_insert_taken_code(dao, redis_client):
    dao.insert('short_links', {'code': 'abc123', 'target_url': 'https://example.com/a'})

    with pytest.raises(UniquenessViolationError, match=re.escape("Record 'short_links' with code 'abc123' already exists.")):
        dao.insert('short_links', {'code': 'abc123', 'target_url': 'https://example.com/b'})

    # Neither the record nor an index of the rejected write may land
    assert dao.find_one('short_links', 'code', 'abc123')['target_url'] == 'https://example.com/a'
    assert redis_client.get(INDEX_KEY.format('https://example.com/b')) is None


# -------------------------------
# 2. Lookup index
# -------------------------------


def test_index_keeps_first_committed_code(dao):
    dao.insert('short_links', {'code': 'first1', 'target_url': 'https://example.com/a'})
    dao.insert('short_links', {'code': 'second', 'target_url': 'https://example.com/a'})

    assert dao.find_one('short_links', 'target_url', 'https://example.com/a')['code'] == 'first1'
    # Both codes stay valid
    assert dao.find_one('short_links', 'code', 'second')['target_url'] == 'https://example.com/a'


# -------------------------------
# 3. Get-or-create over Redis
# -------------------------------


def test_get_or_create_converges_on_one_record(dao, redis_client):
    service = ShortLinkService(dao)

    first = service.get_or_create('https://example.com/a')
    second = service.get_or_create('https://example.com/a')

    assert first.code == second.code
    assert redis_client.keys(RECORD_KEY.format('*')) == [RECORD_KEY.format(first.code)]
