"""Allocation of new short links

The allocator never checks whether a candidate code exists before writing it.
Each attempt is a single conditional insert and the record store is the only
arbiter of uniqueness, which keeps allocation safe under any number of
concurrent callers without application-level locks.

Per call:
    1. Generate a random candidate code.
    2. Insert (code, target_url) conditionally on the code being free.
    3. Success -> return the new ShortLinkModel.
    4. UniquenessViolationError -> discard the candidate, go to 1.
    5. `max_attempts` collisions -> ExhaustedRetriesError.
    6. Any other store error (DataStoreError) -> propagate, no retry.
"""

import logging
from datetime import datetime, UTC
from collections.abc import Callable

from shortlinks.models import ShortLinkModel
from shortlinks.constants import RecordType, ShortCode
from shortlinks.exceptions import ExhaustedRetriesError
from shortlinks.dao.base import RecordStoreBaseDAO
from shortlinks.dao.exceptions import UniquenessViolationError
from shortlinks.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class ShortLinkAllocator:
    """Allocate globally unique short codes for target URLs.

    Attributes:
        store (RecordStoreBaseDAO):
            Record store with an atomic, uniqueness-enforcing insert.
        code_length (int):
            Number of characters per generated code.
        max_attempts (int):
            Insert attempts before giving up with ExhaustedRetriesError.
        generate (Callable[[int], str]):
            Code generator taking the code length. Defaults to generate_shortcode.

    Example:
        >>> allocator = ShortLinkAllocator(store=dao)
        >>> allocator.allocate('https://example.com/a')
        ShortLinkModel(code='q3ZbT0', target_url='https://example.com/a', created_at=...)
    """

    def __init__(
        self,
        store: RecordStoreBaseDAO,
        code_length: int = ShortCode.LENGTH,
        max_attempts: int = ShortCode.MAX_ATTEMPTS,
        generate: Callable[[int], str] = generate_shortcode,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.store = store
        self.code_length = code_length
        self.max_attempts = max_attempts
        self.generate = generate

    def allocate(self, target_url: str) -> ShortLinkModel:
        """Commit a new short link for `target_url`.

        Args:
            target_url (str):
                URL the new code points to. Validated by the caller.

        Returns:
            ShortLinkModel: the committed short link.

        Raises:
            ExhaustedRetriesError:
                If every one of `max_attempts` candidates collided.
            DataStoreError:
                If the store fails for any reason other than a collision.
        """
        for attempt in range(1, self.max_attempts + 1):
            link = ShortLinkModel(
                code=self.generate(self.code_length),
                target_url=target_url,
                created_at=datetime.now(UTC),
            )
            logger.debug('Trying to commit short link.', extra={'shortcode': link.code, 'attempt': attempt})

            try:
                self.store.insert(RecordType.SHORT_LINKS, link.to_record())
            except UniquenessViolationError:
                logger.warning('Shortcode collision, regenerating.', extra={'shortcode': link.code, 'attempt': attempt})
                continue

            logger.info('Allocated short link.', extra={'shortcode': link.code, 'targetUrl': target_url, 'attempts': attempt})
            return link

        logger.error('Shortcode allocation exhausted its attempts.', extra={'targetUrl': target_url, 'attempts': self.max_attempts})
        raise ExhaustedRetriesError(
            f'Could not allocate a unique shortcode after {self.max_attempts} attempts.',
            attempts=self.max_attempts,
        )
