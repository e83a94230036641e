"""
walletdns/__init__.py

walletdns: Domain ↔ Wallet Binding over DNS TXT

A domain owner signs "{timestamp}|{domain}|{expiration}" with an
Ethereum wallet (EIP-191 personal_sign) and publishes

    wallet=<addr>&timestamp=<t>&expiration=<e>&sig=<hex>

at aqua._wallet.<domain>. Anyone can recover the signer from the
record and check that it matches the declared wallet.
"""

__version__ = "0.3.0"

from walletdns.core.canonical import create_message, message_for
from walletdns.core.crypto import WalletKeyManager
from walletdns.core.exceptions import (
    ConfigError,
    MalformedRecordError,
    ProofExpiredError,
    RecordNotFoundError,
    ResolutionError,
    SignatureInvalidError,
    SigningFailedError,
    WalletDNSError,
)
from walletdns.core.models import (
    DEFAULT_DERIVATION_PATH,
    DEFAULT_EXPIRATION_DAYS,
    RECORD_LABEL,
    ExpiringVariant,
    Proof,
    ProofVariant,
    SignatureMethod,
    SignatureRequest,
    SimpleVariant,
)
from walletdns.core.signing import (
    LocalSigner,
    generate_proof,
    generate_simple_proof,
    proof_from_signature,
    request_proof,
    sign_proof,
)
from walletdns.core.txt import decode_txt_record, encode_txt_record, parse_txt_record
from walletdns.core.verification import (
    VerificationOutcome,
    VerificationResult,
    verify_proof,
    verify_txt_record,
)

__all__ = [
    # Core types
    "Proof",
    "ProofVariant",
    "SimpleVariant",
    "ExpiringVariant",
    "SignatureMethod",
    "SignatureRequest",
    "WalletKeyManager",
    "VerificationOutcome",
    "VerificationResult",
    # Protocol
    "create_message",
    "message_for",
    "sign_proof",
    "generate_proof",
    "generate_simple_proof",
    "proof_from_signature",
    "request_proof",
    "LocalSigner",
    "encode_txt_record",
    "decode_txt_record",
    "parse_txt_record",
    "verify_proof",
    "verify_txt_record",
    # Errors
    "WalletDNSError",
    "MalformedRecordError",
    "SignatureInvalidError",
    "ProofExpiredError",
    "SigningFailedError",
    "ResolutionError",
    "RecordNotFoundError",
    "ConfigError",
    # Constants
    "DEFAULT_DERIVATION_PATH",
    "DEFAULT_EXPIRATION_DAYS",
    "RECORD_LABEL",
]
