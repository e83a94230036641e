"""
walletdns/core/crypto.py

Wallet Cryptographic Layer: EIP-191 personal_sign over secp256k1.

Key contracts:
    address                   : @property → EIP-55 checksummed address (NO parentheses)
    sign_message(message)     : str → 0x-prefixed 65-byte hex signature
    recover_address(...)      : @staticmethod: raises on an unrecoverable signature
    verify_detached(...)      : @staticmethod: bool, never raises

Signing input shaping is fixed: eth-account prefixes the UTF-8 message
with "\\x19Ethereum Signed Message:\\n" + str(len(message)) before hashing,
matching MetaMask and ethers.js signMessage().
"""

import re
from typing import Optional

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address, to_hex

from walletdns.core.exceptions import SigningFailedError
from walletdns.core.models import DEFAULT_DERIVATION_PATH

Account.enable_unaudited_hdwallet_features()

# 65 bytes (r ‖ s ‖ v), lowercase hex, lowercase 0x. The only accepted form.
_SIGNATURE_RE = re.compile(r"^0x[0-9a-f]{130}\Z")


def is_canonical_signature(signature) -> bool:
    """True iff `signature` is exactly the form sign_message() produces."""
    return isinstance(signature, str) and _SIGNATURE_RE.match(signature) is not None


class WalletKeyManager:
    """
    secp256k1 wallet key manager.

    Public surface:
        WalletKeyManager.generate()                              → new random key
        WalletKeyManager.from_private_key(hex)                   → load raw key
        WalletKeyManager.from_mnemonic(phrase, path)             → BIP-44 derivation
        WalletKeyManager.recover_address(message, sig)           → @staticmethod
        WalletKeyManager.verify_detached(message, sig, address)  → @staticmethod

        key.address                 (@property) → checksummed address
        key.sign_message(message)               → 0x hex signature
        key.verify(message, sig)                → bool (instance method)
    """

    def __init__(self, account: LocalAccount) -> None:
        self._account: LocalAccount = account
        self._address: str = to_checksum_address(account.address)

    # ── Construction ──────────────────────────────────────────

    @classmethod
    def generate(cls) -> "WalletKeyManager":
        """Generate a new random key."""
        return cls(Account.create())

    @classmethod
    def from_private_key(cls, private_key: str) -> "WalletKeyManager":
        """
        Load a key from 32 bytes of hex, with or without 0x prefix.
        Raises SigningFailedError if the key material is rejected.
        """
        key_hex = (private_key or "").strip()
        if not key_hex.startswith(("0x", "0X")):
            key_hex = "0x" + key_hex
        try:
            return cls(Account.from_key(key_hex))
        except Exception as exc:
            raise SigningFailedError(
                "Invalid private key material",
                {"error": type(exc).__name__},
            ) from exc

    @classmethod
    def from_mnemonic(
        cls,
        mnemonic:        str,
        derivation_path: str = DEFAULT_DERIVATION_PATH,
        passphrase:      str = "",
    ) -> "WalletKeyManager":
        """
        Derive a key from a BIP-39 phrase along `derivation_path`.
        Surrounding whitespace (e.g. a trailing newline from a file) is trimmed.
        """
        phrase = " ".join((mnemonic or "").split())
        try:
            account = Account.from_mnemonic(
                phrase,
                passphrase=passphrase,
                account_path=derivation_path,
            )
        except Exception as exc:
            raise SigningFailedError(
                "Mnemonic derivation failed",
                {"path": derivation_path, "error": type(exc).__name__},
            ) from exc
        return cls(account)

    # ── Address ───────────────────────────────────────────────

    @property
    def address(self) -> str:
        """EIP-55 checksummed address. THIS IS A @property."""
        return self._address

    # ── Signing ───────────────────────────────────────────────

    def sign_message(self, message: str) -> str:
        """
        Sign `message` under EIP-191 personal_sign.

        Returns:
            0x-prefixed hex signature, 132 characters.
        """
        try:
            signed = self._account.sign_message(encode_defunct(text=message))
        except Exception as exc:
            raise SigningFailedError(
                "Signing primitive rejected the message",
                {"address": self._address, "error": type(exc).__name__},
            ) from exc
        return to_hex(signed.signature)

    def verify(self, message: str, signature: str) -> bool:
        """Verify against THIS key's address."""
        return WalletKeyManager.verify_detached(message, signature, self._address)

    # ── Recovery (static) ─────────────────────────────────────

    @staticmethod
    def recover_address(message: str, signature: str) -> str:
        """
        Recover the checksummed signer address of an EIP-191 signature.

        Raises ValueError (or an eth-keys validation error) when the
        signature is not valid hex, has the wrong length, or does not
        correspond to a curve point.
        """
        return Account.recover_message(
            encode_defunct(text=message),
            signature=signature,
        )

    @staticmethod
    def verify_detached(
        message:   str,
        signature: str,
        address:   str,
    ) -> bool:
        """
        True iff `signature` over `message` recovers to `address`.

        Address comparison is case-insensitive, so both checksummed and
        lowercase forms match. False for ANY failure. Never raises.
        """
        recovered = WalletKeyManager.try_recover(message, signature)
        if recovered is None or not isinstance(address, str):
            return False
        return recovered.lower() == address.strip().lower()

    @staticmethod
    def try_recover(message: str, signature: str) -> Optional[str]:
        """
        recover_address(), or None when recovery fails.

        Non-canonical encodings (uppercase hex, 0X prefix, wrong length)
        are refused before recovery, so every textual change to a
        signature changes the outcome.
        """
        if not is_canonical_signature(signature):
            return None
        try:
            return WalletKeyManager.recover_address(message, signature)
        except Exception:
            return None

    def __repr__(self) -> str:
        return f"WalletKeyManager(address={self._address})"
