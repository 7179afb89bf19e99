"""
Signup email domain heuristics: hostname shape, disposable-provider denylist, MX lookup.

Passing all three does not prove the mailbox exists; it only filters obvious junk.
Resolution failures of any kind count as an invalid domain.
"""

import logging
import re
from collections.abc import Callable, Iterable

import dns.exception
import dns.resolver

from jobportal.config import settings

logger = logging.getLogger(__name__)

DOMAIN_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9-]{0,61}[a-zA-Z0-9](?:\.[a-zA-Z]{2,})+$")

DEFAULT_DISPOSABLE_DOMAINS = (
    "tempmail.com",
    "throwawaymail.com",
    "mailinator.com",
    "temp-mail.org",
    "guerrillamail.com",
    "sharklasers.com",
)

# (priority, exchange) pairs for a domain
MxResolver = Callable[[str], Iterable[tuple[object, object]]]


def resolve_mx(domain: str) -> list[tuple[int, str]]:
    """Live MX lookup via dnspython, bounded by ``dns_timeout_seconds``."""
    resolver = dns.resolver.Resolver()
    resolver.timeout = settings.dns_timeout_seconds
    resolver.lifetime = settings.dns_timeout_seconds
    answer = resolver.resolve(domain, "MX")
    records = []
    for rdata in answer:
        exchange = rdata.exchange.to_text(omit_final_dot=True)
        records.append((rdata.preference, "" if exchange in (".", "@") else exchange))
    return records


def _configured_denylist() -> tuple[str, ...]:
    extra = [d.strip().lower() for d in settings.disposable_email_domains.split(",") if d.strip()]
    return DEFAULT_DISPOSABLE_DOMAINS + tuple(extra)


class EmailDomainValidator:
    def __init__(
        self,
        resolver: MxResolver | None = None,
        disposable_domains: Iterable[str] | None = None,
    ) -> None:
        self._resolver = resolver or resolve_mx
        domains = disposable_domains if disposable_domains is not None else _configured_denylist()
        self._disposable = tuple(d.lower() for d in domains)

    @staticmethod
    def domain_of(email: str) -> str:
        return email.rsplit("@", 1)[-1] if "@" in email else ""

    def is_disposable(self, domain: str) -> bool:
        lowered = domain.lower()
        return any(d in lowered for d in self._disposable)

    def is_valid(self, email: str) -> bool:
        domain = self.domain_of(email)
        if not DOMAIN_RE.match(domain):
            return False
        if self.is_disposable(domain):
            logger.info("Rejected disposable email domain: %s", domain)
            return False
        try:
            records = list(self._resolver(domain) or [])
        except (dns.exception.DNSException, OSError) as e:
            logger.info("MX lookup failed for %s: %s", domain, e)
            return False
        return any(
            isinstance(priority, int) and isinstance(exchange, str) and len(exchange) > 0
            for priority, exchange in records
        )
