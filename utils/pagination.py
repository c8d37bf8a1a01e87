import html
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse, parse_qs

from domain.models import PageLink, Paginated


def _page_from_url(url: Optional[str]) -> Optional[int]:
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get('page')
    if not values:
        return 1
    try:
        return int(values[0])
    except ValueError:
        return None


def parse_links(raw_links: Optional[List[Dict[str, Any]]]) -> List[PageLink]:
    """Turn the server's (label, url, active) tuples into PageLinks.

    Labels arrive HTML-escaped (``&laquo; Previous``).
    """
    links = []
    for raw in raw_links or []:
        label = html.unescape(str(raw.get('label', ''))).strip()
        url = raw.get('url')
        links.append(PageLink(label=label, url=url, active=bool(raw.get('active')),
                              page=_page_from_url(url)))
    return links


def paginated_from_props(value: Any, converter: Callable[[Dict[str, Any]], Any] = lambda d: d,
                         per_page: int = 20) -> Paginated:
    """Accept either a plain list or a paginator object from page props."""
    if value is None:
        return Paginated(items=[], per_page=per_page)
    if isinstance(value, list):
        items = [converter(d) for d in value]
        return Paginated(items=items, total=len(items), per_page=per_page)
    items = [converter(d) for d in value.get('data') or []]
    return Paginated(
        items=items,
        links=parse_links(value.get('links')),
        total=int(value.get('total') or len(items)),
        current_page=int(value.get('current_page') or 1),
        last_page=int(value.get('last_page') or 1),
        per_page=int(value.get('per_page') or per_page),
    )
