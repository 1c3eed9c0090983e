"""Unit tests for ShortLinkService and get_or_create_short_link

Test coverage includes:

1. Input validation
   - Missing, empty or non-string targets raise InvalidInputError before any store access.

2. Fast path
   - A resolver hit is returned and the allocator is never invoked.
   - Resolving twice after one allocation yields the same code with zero inserts.

3. Slow path
   - A resolver miss runs the allocator and propagates its result and errors.

4. Short URL rendering
   - <base>/r/<code>, configured base taking precedence.

5. End-to-end scenario against an empty store.
"""

import re
import string
from unittest.mock import MagicMock

import pytest

from shortlinks.allocation import ShortLinkService, ShortLinkResolver, ShortLinkAllocator, get_or_create_short_link
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ExhaustedRetriesError, InvalidInputError
from shortlinks.models import ShortLinkModel
from shortlinks.utils.config import ShortLinksConfig


@pytest.fixture
def resolver():
    return MagicMock(spec=ShortLinkResolver)


@pytest.fixture
def allocator():
    return MagicMock(spec=ShortLinkAllocator)


@pytest.fixture
def service(store, resolver, allocator):
    return ShortLinkService(store, resolver=resolver, allocator=allocator)


# -------------------------------
# 1. Input validation
# -------------------------------


@pytest.mark.parametrize('target_url', [None, '', 42, b'https://example.com', ['https://example.com']])
def test_invalid_target_url(service, resolver, allocator, target_url):
    with pytest.raises(InvalidInputError):
        service.get_or_create(target_url)

    resolver.resolve.assert_not_called()
    allocator.allocate.assert_not_called()


# -------------------------------
# 2. Fast path
# -------------------------------


def test_resolver_hit_bypasses_allocator(service, resolver, allocator):
    existing = ShortLinkModel(code='aB3xZ9', target_url='https://example.com/a')
    resolver.resolve.return_value = existing

    assert service.get_or_create('https://example.com/a') is existing
    allocator.allocate.assert_not_called()


def test_repeated_requests_converge_on_one_code(store):
    service = ShortLinkService(store)

    first = service.get_or_create('https://example.com/a')
    inserts_after_first = len(store.insert_calls)
    second = service.get_or_create('https://example.com/a')
    third = service.get_or_create('https://example.com/a')

    assert first.code == second.code == third.code
    assert inserts_after_first == 1
    assert len(store.insert_calls) == 1


def test_resolver_store_error_propagates(service, resolver, allocator):
    resolver.resolve.side_effect = DataStoreError('down')

    with pytest.raises(DataStoreError):
        service.get_or_create('https://example.com/a')
    allocator.allocate.assert_not_called()


# -------------------------------
# 3. Slow path
# -------------------------------


def test_resolver_miss_runs_allocator(service, resolver, allocator):
    created = ShortLinkModel(code='q3ZbT0', target_url='https://example.com/a')
    resolver.resolve.return_value = None
    allocator.allocate.return_value = created

    assert service.get_or_create('https://example.com/a') is created
    allocator.allocate.assert_called_once_with('https://example.com/a')


@pytest.mark.parametrize('error', [ExhaustedRetriesError('exhausted', attempts=5), DataStoreError('down')])
def test_allocator_errors_propagate(service, resolver, allocator, error):
    resolver.resolve.return_value = None
    allocator.allocate.side_effect = error

    with pytest.raises(type(error)):
        service.get_or_create('https://example.com/a')


def test_config_is_passed_to_allocator(store):
    service = ShortLinkService(store, ShortLinksConfig(code_length=8, max_attempts=3))

    assert service.allocator.code_length == 8
    assert service.allocator.max_attempts == 3
    assert len(service.get_or_create('https://example.com/a').code) == 8


# -------------------------------
# 4. Short URL rendering
# -------------------------------


def test_short_url_from_request_base(store):
    service = ShortLinkService(store)
    link = ShortLinkModel(code='aB3xZ9', target_url='https://example.com/a')

    assert service.short_url(link, 'https://sho.rt/') == 'https://sho.rt/r/aB3xZ9'


def test_short_url_prefers_configured_base(store):
    service = ShortLinkService(store, ShortLinksConfig(short_url_base='https://links.example.org'))
    link = ShortLinkModel(code='aB3xZ9', target_url='https://example.com/a')

    assert service.short_url(link, 'https://ignored.example') == 'https://links.example.org/r/aB3xZ9'


def test_short_url_without_base(store):
    service = ShortLinkService(store)
    link = ShortLinkModel(code='aB3xZ9', target_url='https://example.com/a')

    with pytest.raises(ValueError, match='No base URL'):
        service.short_url(link)


# -------------------------------
# 5. End-to-end scenario
# -------------------------------


def test_get_or_create_short_link_scenario(store):
    link = get_or_create_short_link('https://example.com/a', store=store)

    assert re.fullmatch(f'[{re.escape(string.ascii_letters + string.digits)}]{{6}}', link.code)
    assert len(store.insert_calls) == 1
    assert ShortLinkService(store).short_url(link, 'https://sho.rt') == f'https://sho.rt/r/{link.code}'

    again = get_or_create_short_link('https://example.com/a', store=store)

    assert again.code == link.code
    assert len(store.insert_calls) == 1


def test_get_or_create_short_link_invalid_input(store):
    with pytest.raises(InvalidInputError):
        get_or_create_short_link('', store=store)
    assert store.find_calls == []
