"""
walletdns/core/models.py

Proof Data Model

═══════════════════════════════════════════════════════════════════
PROTOCOL CONTRACTS
═══════════════════════════════════════════════════════════════════

CONTRACT 1: Message
    ExpiringVariant  → "{timestamp}|{domain}|{expiration}"
    SimpleVariant    → "{timestamp}|{domain}"
    built by walletdns.core.canonical only

CONTRACT 2: Signing
    scheme    = EIP-191 personal_sign (version 0x45)
    encoding  = 0x-prefixed hex, 65 bytes (r ‖ s ‖ v)

CONTRACT 3: Timestamps
    Unix seconds, base-10 string. source = walletdns.core.time

CONTRACT 4: Variant
    Exactly one ProofVariant per Proof. The two message formats are not
    interchangeable. A SimpleVariant nonce is never signed and never
    published.

CONTRACT 5: TXT record
    wallet=<addr>&timestamp=<t>[&expiration=<e>]&sig=<hex>
    encode order is fixed, decode order is free.
═══════════════════════════════════════════════════════════════════
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


# ─────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────

DEFAULT_EXPIRATION_DAYS = 90
DEFAULT_DERIVATION_PATH = "m/44'/60'/0'/0/0"

# TXT records are published at <RECORD_LABEL>.<domain>
RECORD_LABEL = "aqua._wallet"

MESSAGE_DELIMITER = "|"


class TxtField:
    """
    TXT record key names.

    ENCODE_ORDER is the only order encode_txt_record() writes.
    """
    WALLET     = "wallet"
    TIMESTAMP  = "timestamp"
    EXPIRATION = "expiration"
    SIGNATURE  = "sig"

    REQUIRED = (WALLET, TIMESTAMP, SIGNATURE)
    ENCODE_ORDER = (WALLET, TIMESTAMP, EXPIRATION, SIGNATURE)


# ─────────────────────────────────────────────────────────────
# ProofVariant (tagged union)
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SimpleVariant:
    """Message is "{timestamp}|{domain}". The nonce stays local."""
    nonce: str = ""

    tag = "simple"


@dataclass(frozen=True)
class ExpiringVariant:
    """Message is "{timestamp}|{domain}|{expiration}"."""
    expiration: str

    tag = "expiring"

    def is_expired(self, now: int) -> bool:
        """A proof stays valid only while expiration is strictly in the future."""
        return int(self.expiration) <= int(now)


ProofVariant = Union[SimpleVariant, ExpiringVariant]


def unknown_variant(variant) -> TypeError:
    """Error for a value that is neither SimpleVariant nor ExpiringVariant."""
    return TypeError(f"Unknown proof variant: {type(variant).__name__}")


# ─────────────────────────────────────────────────────────────
# Proof
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Proof:
    """
    A signed assertion that `wallet_address` controls `domain_name`.

    Created fresh by signing or by assembling an external signature,
    rebuilt from a TXT record at verification time. Never mutated.
    """

    wallet_address: str
    domain_name:    str
    timestamp:      str
    variant:        ProofVariant
    signature:      str

    @property
    def expiration(self) -> Optional[str]:
        if isinstance(self.variant, ExpiringVariant):
            return self.variant.expiration
        return None

    @property
    def nonce(self) -> Optional[str]:
        if isinstance(self.variant, SimpleVariant):
            return self.variant.nonce
        return None

    def to_dict(self) -> dict:
        data = {
            "wallet_address": self.wallet_address,
            "domain_name":    self.domain_name,
            "timestamp":      self.timestamp,
            "variant":        self.variant.tag,
            "signature":      self.signature,
        }
        if isinstance(self.variant, ExpiringVariant):
            data["expiration"] = self.variant.expiration
        elif isinstance(self.variant, SimpleVariant):
            data["nonce"] = self.variant.nonce
        else:
            raise unknown_variant(self.variant)
        return data

    def __repr__(self) -> str:
        return (
            f"Proof({self.variant.tag}, wallet={self.wallet_address}, "
            f"domain={self.domain_name}, timestamp={self.timestamp})"
        )


# ─────────────────────────────────────────────────────────────
# External signing requests
# ─────────────────────────────────────────────────────────────

class SignatureMethod(Enum):
    METAMASK    = "metamask"
    MNEMONIC    = "mnemonic"
    INTERACTIVE = "interactive"


@dataclass(frozen=True)
class SignatureRequest:
    """
    What an external signer is asked to sign.

    `address` may be empty when the signer has not revealed it yet.
    """
    message: str
    address: str
    method:  SignatureMethod

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "address": self.address,
            "method":  self.method.value,
        }
