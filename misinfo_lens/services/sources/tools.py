# misinfo_lens/services/sources/tools.py
import logging
from typing import Any, List
from urllib.parse import urlparse

import tldextract

log = logging.getLogger(__name__)

# Bundled public suffix snapshot, no network fetch
_extract = tldextract.TLDExtract(suffix_list_urls=())


def extract_domain(url: str) -> str:
    """Registered domain of ``url``, e.g. ``https://www.who.int/x`` -> ``who.int``."""
    extracted = _extract(url)
    if not extracted.suffix:
        return extracted.domain.lower()
    return f"{extracted.domain}.{extracted.suffix}".lower()


def is_trusted_url(url: str, domain: str) -> bool:
    """True for http(s) URLs on the ``domain`` organization (any subdomain)."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return False
    domain = domain.lower()
    if extract_domain(url) == domain:
        return True
    # Trust domain configured as a specific host, e.g. "www.who.int"
    return parsed.hostname.lower() == domain


def parse_source_urls(raw: Any, domain: str, limit: int) -> List[str]:
    """
    Pull trusted URLs out of the LLM output.

    Accepts ``{"sources": [...]}`` or a bare list. Entries may be strings or
    ``{"url": ...}`` dicts. Order is kept; repeats and off-domain links dropped.
    """
    if isinstance(raw, dict):
        raw = raw.get("sources", [])
    if not isinstance(raw, list):
        raise ValueError(f"Expected a list of sources, got {type(raw).__name__}")

    urls = []
    seen = set()
    for item in raw:
        url = item.get("url", "") if isinstance(item, dict) else item
        if not isinstance(url, str):
            continue
        url = url.strip()
        if not url or url in seen:
            continue
        if not is_trusted_url(url, domain):
            log.info(f"Dropping source outside {domain}: {url}")
            continue
        seen.add(url)
        urls.append(url)

    return urls[:limit]
