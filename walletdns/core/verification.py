"""
walletdns/core/verification.py

Proof Verification

Protocol Law:
    verify_proof(proof, domain) is the ONLY signature verification path.
    verify_txt_record() parses first, then calls verify_proof().

    The message is rebuilt from the VERIFIER's domain argument. A record
    copied from a.com to b.com therefore recovers a different address.

Order of checks:
    1. decode                 → MALFORMED_RECORD
    2. variant hint           → MALFORMED_RECORD
    3. signature recovery     → SIGNATURE_INVALID
    4. expiration > now       → PROOF_EXPIRED
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Type

from walletdns.core.canonical import message_for
from walletdns.core.crypto import WalletKeyManager
from walletdns.core.exceptions import (
    MalformedRecordError,
    ProofExpiredError,
    SignatureInvalidError,
)
from walletdns.core.models import (
    ExpiringVariant,
    Proof,
    SimpleVariant,
    unknown_variant,
)
from walletdns.core.time import unix_now
from walletdns.core.txt import parse_txt_record

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# Result Type
# ─────────────────────────────────────────────────────────────

class VerificationOutcome(Enum):
    VALID             = "valid"
    MALFORMED_RECORD  = "malformed_record"
    SIGNATURE_INVALID = "signature_invalid"
    PROOF_EXPIRED     = "proof_expired"


_OUTCOME_ERRORS = {
    VerificationOutcome.MALFORMED_RECORD:  MalformedRecordError,
    VerificationOutcome.SIGNATURE_INVALID: SignatureInvalidError,
    VerificationOutcome.PROOF_EXPIRED:     ProofExpiredError,
}


@dataclass
class VerificationResult:
    outcome:           VerificationOutcome
    domain:            str
    reason:            str = ""
    proof:             Optional[Proof] = None
    recovered_address: Optional[str] = None
    details:           Dict = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return self.outcome is VerificationOutcome.VALID

    def __bool__(self) -> bool:
        return self.valid

    def __repr__(self) -> str:
        return f"VerificationResult({self.outcome.name}, {self.domain})"

    def raise_for_outcome(self) -> None:
        """Raise the exception matching a failed outcome. No-op when valid."""
        error = _OUTCOME_ERRORS.get(self.outcome)
        if error is not None:
            raise error(self.reason, dict(self.details))

    def to_dict(self) -> dict:
        return {
            "valid":             self.valid,
            "outcome":           self.outcome.value,
            "domain":            self.domain,
            "reason":            self.reason,
            "wallet":            self.proof.wallet_address if self.proof else None,
            "recovered_address": self.recovered_address,
            "timestamp":         self.proof.timestamp if self.proof else None,
            "expiration":        self.proof.expiration if self.proof else None,
            "details":           self.details,
        }


# ─────────────────────────────────────────────────────────────
# Primary Verification Entrypoint
# ─────────────────────────────────────────────────────────────

def verify_proof(
    proof:  Proof,
    domain: str,
    now:    Optional[int] = None,
) -> VerificationResult:
    """
    Verify `proof` as a claim on `domain` at time `now`.

    proof.domain_name is ignored; only the verifier's `domain` is signed over.
    """
    variant = proof.variant
    if not isinstance(variant, (SimpleVariant, ExpiringVariant)):
        raise unknown_variant(variant)

    times = [proof.timestamp]
    if isinstance(variant, ExpiringVariant):
        times.append(variant.expiration)
    if not all(isinstance(t, str) and t.isascii() and t.isdigit() for t in times):
        return VerificationResult(
            outcome= VerificationOutcome.MALFORMED_RECORD,
            domain=  domain,
            reason=  "Timestamps must be Unix seconds",
            proof=   proof,
        )

    message   = message_for(proof.timestamp, domain, variant)
    recovered = WalletKeyManager.try_recover(message, proof.signature)

    if recovered is None:
        return VerificationResult(
            outcome= VerificationOutcome.SIGNATURE_INVALID,
            domain=  domain,
            reason=  "Signature could not be recovered",
            proof=   proof,
            details= {"wallet": proof.wallet_address},
        )

    if recovered.lower() != proof.wallet_address.strip().lower():
        logger.debug(
            "Signer mismatch for %s: declared %s, recovered %s",
            domain, proof.wallet_address, recovered,
        )
        return VerificationResult(
            outcome=           VerificationOutcome.SIGNATURE_INVALID,
            domain=            domain,
            reason=            "Recovered address does not match wallet",
            proof=             proof,
            recovered_address= recovered,
            details=           {"wallet": proof.wallet_address, "recovered": recovered},
        )

    if isinstance(variant, ExpiringVariant):
        now = unix_now() if now is None else int(now)
        if variant.is_expired(now):
            return VerificationResult(
                outcome=           VerificationOutcome.PROOF_EXPIRED,
                domain=            domain,
                reason=            "Proof has expired",
                proof=             proof,
                recovered_address= recovered,
                details=           {"expiration": variant.expiration, "now": now},
            )

    return VerificationResult(
        outcome=           VerificationOutcome.VALID,
        domain=            domain,
        reason=            "Signature verified",
        proof=             proof,
        recovered_address= recovered,
    )


def verify_txt_record(
    txt:     str,
    domain:  str,
    now:     Optional[int] = None,
    variant: Optional[Type] = None,
) -> VerificationResult:
    """
    TXT-string entry point. Parses into a Proof, then calls verify_proof().

    `variant` (SimpleVariant or ExpiringVariant) pins the format the
    caller expects; a record of the other format is MALFORMED_RECORD.
    With no hint the format follows the presence of `expiration`.
    """
    try:
        proof = parse_txt_record(txt, domain)
    except MalformedRecordError as e:
        return VerificationResult(
            outcome= VerificationOutcome.MALFORMED_RECORD,
            domain=  domain,
            reason=  e.message,
            details= dict(e.details),
        )

    if variant is not None and not isinstance(proof.variant, variant):
        return VerificationResult(
            outcome= VerificationOutcome.MALFORMED_RECORD,
            domain=  domain,
            reason=  f"Expected a {variant.tag} record, got {proof.variant.tag}",
            proof=   proof,
            details= {"expected": variant.tag, "actual": proof.variant.tag},
        )

    return verify_proof(proof, domain, now=now)
