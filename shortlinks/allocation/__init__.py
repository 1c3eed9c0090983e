from shortlinks.allocation.resolver import ShortLinkResolver
from shortlinks.allocation.allocator import ShortLinkAllocator
from shortlinks.allocation.service import ShortLinkService, get_or_create_short_link


__all__ = [
    'ShortLinkResolver',
    'ShortLinkAllocator',
    'ShortLinkService',
    'get_or_create_short_link',
]
