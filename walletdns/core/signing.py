"""
walletdns/core/signing.py

Proof production.

    sign_proof()             in-process key, any variant
    generate_proof()         in-process key, expiring variant, clock-driven
    generate_simple_proof()  in-process key, simple variant, clock-driven
    proof_from_signature()   external signer already produced the signature
    request_proof()          await an external MessageSigner

None of these touch the network or the disk.
"""

import logging
from typing import Optional, Protocol

from walletdns.core.canonical import message_for
from walletdns.core.crypto import WalletKeyManager
from walletdns.core.exceptions import SigningFailedError, WalletDNSError
from walletdns.core.models import (
    DEFAULT_EXPIRATION_DAYS,
    ExpiringVariant,
    Proof,
    ProofVariant,
    SignatureMethod,
    SignatureRequest,
    SimpleVariant,
)
from walletdns.core.time import expiration_after, unix_now, unix_timestamp

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# In-process signing
# ─────────────────────────────────────────────────────────────

def sign_proof(
    key:       WalletKeyManager,
    domain:    str,
    timestamp: str,
    variant:   ProofVariant,
) -> Proof:
    """
    Sign the canonical message for (timestamp, domain, variant).

    The returned Proof carries key.address and the inputs unchanged.
    """
    message   = message_for(timestamp, domain, variant)
    signature = key.sign_message(message)
    logger.debug("Signed %s proof for %s as %s", variant.tag, domain, key.address)
    return Proof(
        wallet_address= key.address,
        domain_name=    domain,
        timestamp=      timestamp,
        variant=        variant,
        signature=      signature,
    )


def generate_proof(
    domain:          str,
    key:             WalletKeyManager,
    expiration_days: int = DEFAULT_EXPIRATION_DAYS,
    now:             Optional[int] = None,
) -> Proof:
    """Expiring proof valid for `expiration_days` from `now`."""
    if expiration_days <= 0:
        raise ValueError(f"expiration_days must be positive, got {expiration_days}")
    now = unix_now() if now is None else int(now)
    variant = ExpiringVariant(expiration=expiration_after(expiration_days, now))
    return sign_proof(key, domain, unix_timestamp(now), variant)


def generate_simple_proof(
    domain: str,
    key:    WalletKeyManager,
    now:    Optional[int] = None,
    nonce:  str = "",
) -> Proof:
    """Non-expiring proof. `nonce` is kept on the Proof only."""
    return sign_proof(key, domain, unix_timestamp(now), SimpleVariant(nonce=nonce))


# ─────────────────────────────────────────────────────────────
# External signing
# ─────────────────────────────────────────────────────────────

def proof_from_signature(
    domain:         str,
    wallet_address: str,
    timestamp:      str,
    variant:        ProofVariant,
    signature:      str,
) -> Proof:
    """
    Assemble a Proof from a signature produced elsewhere.

    Nothing is checked here; trust is deferred to verification.
    """
    return Proof(
        wallet_address= wallet_address,
        domain_name=    domain,
        timestamp=      timestamp,
        variant=        variant,
        signature=      signature,
    )


def signature_request(
    domain:    str,
    timestamp: str,
    variant:   ProofVariant,
    address:   str = "",
    method:    SignatureMethod = SignatureMethod.METAMASK,
) -> SignatureRequest:
    """Describe the message an external signer must sign."""
    return SignatureRequest(
        message= message_for(timestamp, domain, variant),
        address= address,
        method=  method,
    )


class MessageSigner(Protocol):
    """Anything that can personal_sign a message, possibly after a prompt."""

    address: str

    async def sign_message(self, message: str) -> str:
        ...


class LocalSigner:
    """MessageSigner backed by an in-process WalletKeyManager."""

    def __init__(self, key: WalletKeyManager):
        self._key = key
        self.address = key.address

    async def sign_message(self, message: str) -> str:
        return self._key.sign_message(message)


async def request_proof(
    signer:    MessageSigner,
    domain:    str,
    timestamp: str,
    variant:   ProofVariant,
) -> Proof:
    """
    Ask `signer` for a signature and assemble the Proof.

    Completes once or fails once. Any signer failure surfaces as
    SigningFailedError; the caller decides whether to ask again.
    """
    message = message_for(timestamp, domain, variant)
    try:
        signature = await signer.sign_message(message)
    except WalletDNSError:
        raise
    except Exception as exc:
        raise SigningFailedError(
            f"Signer failed: {exc}",
            {"address": getattr(signer, "address", "")},
        ) from exc
    if not signature:
        raise SigningFailedError("Signer returned an empty signature")
    return proof_from_signature(domain, signer.address, timestamp, variant, signature)
