"""
walletdns: Canonical Message Construction

This is the ONLY place the signed message is built.
Signer and verifier MUST both call this module; any drift between the
two yields a different recovered address and a silent verification
failure.

No escaping is done. Callers supply domains without "|".
"""

from typing import Optional

from walletdns.core.models import (
    MESSAGE_DELIMITER,
    ExpiringVariant,
    ProofVariant,
    SimpleVariant,
    unknown_variant,
)


def create_message(
    timestamp:  str,
    domain:     str,
    expiration: Optional[str] = None,
) -> str:
    """
    Build the signing input.

        create_message("1700000000", "example.com", "1707776000")
            → "1700000000|example.com|1707776000"
        create_message("1700000000", "example.com")
            → "1700000000|example.com"
    """
    parts = [timestamp, domain]
    if expiration is not None:
        parts.append(expiration)
    return MESSAGE_DELIMITER.join(parts)


def message_for(timestamp: str, domain: str, variant: ProofVariant) -> str:
    """Build the signing input for a given proof variant."""
    if isinstance(variant, ExpiringVariant):
        return create_message(timestamp, domain, variant.expiration)
    if isinstance(variant, SimpleVariant):
        return create_message(timestamp, domain)
    raise unknown_variant(variant)
