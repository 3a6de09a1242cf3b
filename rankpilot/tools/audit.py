"""
SEO audit tool.

The page is fetched first so the model can judge real content; if the fetch
fails the audit still runs from the URL alone.
"""

import asyncio
import ipaddress
import logging
from urllib.parse import urljoin, urlparse

import aiohttp
import dns.asyncresolver
import dns.exception
from bs4 import BeautifulSoup

from rankpilot.activity_types import ActivityType
from rankpilot.schemas.tools import AuditUrlInput, AuditUrlOutput
from rankpilot.tools import prompts
from rankpilot.tools.base import Tool

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 100_000
MAX_REDIRECTS = 5
REDIRECT_STATUSES = {301, 302, 303, 307, 308}
FETCH_TIMEOUT = aiohttp.ClientTimeout(total=15)
USER_AGENT = "Mozilla/5.0 (compatible; RankPilotAudit/1.0)"


async def is_public_host(host: str) -> bool:
    """True only when every address ``host`` resolves to is globally routable."""
    if not host:
        return False
    try:
        return ipaddress.ip_address(host).is_global
    except ValueError:
        pass

    resolver = dns.asyncresolver.Resolver()
    resolver.lifetime = 5
    addresses = []
    for rdtype in ("A", "AAAA"):
        try:
            answer = await resolver.resolve(host, rdtype)
        except dns.exception.DNSException:
            continue
        addresses.extend(ipaddress.ip_address(r.address) for r in answer)
    return bool(addresses) and all(a.is_global for a in addresses)


async def fetch_page_text(url: str) -> str | None:
    """Visible body text of ``url``, or None when it cannot be retrieved.

    Private, loopback and link-local hosts are never contacted, including
    as redirect targets.
    """
    try:
        async with aiohttp.ClientSession(timeout=FETCH_TIMEOUT) as session:
            for _ in range(MAX_REDIRECTS + 1):
                parsed = urlparse(url)
                if parsed.scheme not in ("http", "https") or not await is_public_host(parsed.hostname or ""):
                    logger.warning("Refusing to fetch %s: not a public http(s) host", url)
                    return None
                async with session.get(
                    url, allow_redirects=False, headers={"User-Agent": USER_AGENT}
                ) as resp:
                    location = resp.headers.get("Location")
                    if resp.status in REDIRECT_STATUSES and location:
                        url = urljoin(url, location)
                        continue
                    if resp.status != 200:
                        logger.info("Audit fetch %s → HTTP %d", url, resp.status)
                        return None
                    html = await resp.text(errors="replace")
                    break
            else:
                logger.info("Audit fetch %s: too many redirects", url)
                return None
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.info("Could not fetch content for %s: %s", url, e)
        return None

    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    body = soup.body or soup
    text = " ".join(body.get_text(separator=" ").split())
    if not text:
        return None
    if len(text) > MAX_CONTENT_CHARS:
        logger.info("Content for %s is %d chars, truncating", url, len(text))
        text = text[:MAX_CONTENT_CHARS]
    return text


async def _prepare(params: AuditUrlInput) -> dict:
    return {"content": await fetch_page_text(params.url)}


def _build_prompt(params: AuditUrlInput, context: dict) -> str:
    return prompts.seo_audit(params.url, context.get("content"))


def _describe(params: AuditUrlInput, output: AuditUrlOutput) -> dict:
    return {"url": params.url, "score": output.overall_score}


def _summarize(params: AuditUrlInput, output: AuditUrlOutput) -> str:
    return f"Audited {params.url}: overall score {output.overall_score:g}/100."


seo_audit = Tool(
    slug="seo-audit",
    activity_type=ActivityType.AUDIT,
    input_model=AuditUrlInput,
    output_model=AuditUrlOutput,
    system_prompt=prompts.AUDIT_SYSTEM,
    build_prompt=_build_prompt,
    describe=_describe,
    summarize=_summarize,
    temperature=0.2,
    prepare=_prepare,
)
