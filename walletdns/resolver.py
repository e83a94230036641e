"""
walletdns/resolver.py

DNS TXT lookup for published proofs.

The proof lives at <RECORD_LABEL>.<domain>. Each TXT RR may be split
into several character-strings; they are joined before decoding.
"""

import logging
from typing import List, Optional

import dns.exception
import dns.resolver

from walletdns.core.exceptions import RecordNotFoundError, ResolutionError
from walletdns.core.models import RECORD_LABEL, TxtField

logger = logging.getLogger(__name__)


def record_name(domain: str, label: str = RECORD_LABEL) -> str:
    """aqua._wallet.example.com for example.com."""
    domain = domain.strip().rstrip(".")
    if not domain:
        raise ValueError("domain must not be empty")
    return f"{label}.{domain}" if label else domain


class TxtResolver:
    """Thin wrapper over dns.resolver.Resolver for proof records."""

    def __init__(
        self,
        timeout:  float = 3.0,
        lifetime: float = 6.0,
        label:    str = RECORD_LABEL,
        resolver: Optional[dns.resolver.Resolver] = None,
    ):
        self.label = label
        self._resolver = resolver or dns.resolver.Resolver(configure=True)
        self._resolver.timeout = float(timeout)
        self._resolver.lifetime = float(lifetime)

    def fetch_txt_records(self, domain: str) -> List[str]:
        """
        All TXT values published for `domain`, one string per RR.

        Raises:
            RecordNotFoundError: NXDOMAIN or no TXT answer.
            ResolutionError:     timeout or any other resolver failure.
        """
        qname = record_name(domain, self.label)
        logger.debug("Resolving TXT %s", qname)
        try:
            answer = self._resolver.resolve(qname, "TXT", raise_on_no_answer=False)
        except dns.resolver.NXDOMAIN as exc:
            raise RecordNotFoundError("No such name", {"qname": qname}) from exc
        except dns.exception.Timeout as exc:
            raise ResolutionError("DNS query timed out", {"qname": qname}) from exc
        except dns.exception.DNSException as exc:
            raise ResolutionError(
                f"DNS query failed: {exc.__class__.__name__}",
                {"qname": qname},
            ) from exc

        values: List[str] = []
        if answer.rrset:
            for rdata in answer:
                strings = getattr(rdata, "strings", None)
                if strings:
                    values.append(b"".join(strings).decode("utf-8", errors="replace"))
                else:
                    values.append(str(rdata).strip('"'))

        if not values:
            raise RecordNotFoundError("No TXT record", {"qname": qname})
        return values

    def fetch_proof_record(self, domain: str) -> str:
        """
        The first TXT value that looks like a proof.

        Falls back to the first value so the decoder can report why it
        is malformed.
        """
        values = self.fetch_txt_records(domain)
        prefix = f"{TxtField.WALLET}="
        for value in values:
            if value.lstrip('" ').startswith(prefix):
                return value
        logger.debug("No TXT value at %s starts with %r", domain, prefix)
        return values[0]
