"""Idempotent fast path: look up an already issued short link by target URL."""

import logging

from shortlinks.models import ShortLinkModel
from shortlinks.constants import RecordType
from shortlinks.dao.base import RecordStoreBaseDAO


logger = logging.getLogger(__name__)


class ShortLinkResolver:
    """Resolve a target URL to its previously committed short link.

    Target URLs are not unique at the store level; whichever record the store
    returns for the lookup is authoritative. Store failures (DataStoreError)
    propagate to the caller and are never retried here.
    """

    def __init__(self, store: RecordStoreBaseDAO):
        self.store = store

    def resolve(self, target_url: str) -> ShortLinkModel | None:
        record = self.store.find_one(RecordType.SHORT_LINKS, 'target_url', target_url)
        if record is None:
            logger.debug('No short link issued for target URL yet.', extra={'targetUrl': target_url})
            return None

        link = ShortLinkModel.from_record(record)
        logger.debug('Resolved existing short link.', extra={'targetUrl': target_url, 'shortcode': link.code})
        return link
