"""Get-or-create entry point for short links

Composition:
    1. Validate the target URL (non-empty string) -> InvalidInputError.
    2. Resolver hit -> return it; the allocator is never invoked.
    3. Miss -> allocator; its result or error propagates unchanged.

No lock is held across steps 2 and 3. Two concurrent first-time requests for
the same URL may both miss and each commit a different code. Both codes stay
valid and later resolves return the first committed one.

Example:
    >>> from shortlinks.allocation import get_or_create_short_link
    >>> link = get_or_create_short_link('https://example.com/a', store=dao)
    >>> get_or_create_short_link('https://example.com/a', store=dao).code == link.code
    True
"""

from shortlinks.models import ShortLinkModel
from shortlinks.exceptions import InvalidInputError
from shortlinks.dao.base import RecordStoreBaseDAO
from shortlinks.utils.config import ShortLinksConfig
from shortlinks.utils.helpers import get_short_url
from shortlinks.allocation.resolver import ShortLinkResolver
from shortlinks.allocation.allocator import ShortLinkAllocator


class ShortLinkService:
    """Resolve-or-allocate short links against a single record store.

    Attributes:
        resolver (ShortLinkResolver): idempotent fast path.
        allocator (ShortLinkAllocator): slow path, run only on resolver misses.
    """

    def __init__(
        self,
        store: RecordStoreBaseDAO,
        config: ShortLinksConfig | None = None,
        resolver: ShortLinkResolver | None = None,
        allocator: ShortLinkAllocator | None = None,
    ):
        config = config or ShortLinksConfig()
        self.config = config
        self.resolver = resolver or ShortLinkResolver(store)
        self.allocator = allocator or ShortLinkAllocator(
            store,
            code_length=config.code_length,
            max_attempts=config.max_attempts,
        )

    def get_or_create(self, target_url: str) -> ShortLinkModel:
        """Return the short link of `target_url`, allocating one on first use.

        Raises:
            InvalidInputError: if `target_url` is not a non-empty string.
            ExhaustedRetriesError: if allocation collided on every attempt.
            DataStoreError: if the record store is unavailable.
        """
        if not isinstance(target_url, str) or not target_url:
            raise InvalidInputError(f'Target URL must be a non-empty string (given value: {target_url!r}).')

        link = self.resolver.resolve(target_url)
        if link is not None:
            return link
        return self.allocator.allocate(target_url)

    def short_url(self, link: ShortLinkModel, base: str | None = None) -> str:
        """Render the public short URL of `link` as <base>/r/<code>.

        The configured `short_url_base` takes precedence over `base`.
        """
        base = self.config.short_url_base or base
        if not base:
            raise ValueError('No base URL configured or given for short URLs.')
        return get_short_url(link.code, base)


def get_or_create_short_link(
    target_url: str,
    store: RecordStoreBaseDAO,
    config: ShortLinksConfig | None = None,
) -> ShortLinkModel:
    """Functional shortcut for ShortLinkService(store, config).get_or_create(target_url)."""
    return ShortLinkService(store, config).get_or_create(target_url)
