"""
walletdns/core/keys.py

Key-material providers.

The proof protocol only ever sees a WalletKeyManager. Where that key
comes from (a raw hex key, a BIP-39 phrase, a credentials file, a
terminal prompt) lives here, behind KeyProvider.load_key().
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol

import yaml

from walletdns.core.crypto import WalletKeyManager
from walletdns.core.exceptions import ConfigError
from walletdns.core.models import DEFAULT_DERIVATION_PATH

logger = logging.getLogger(__name__)


def derive_key(mnemonic: str, derivation_path: str = DEFAULT_DERIVATION_PATH) -> WalletKeyManager:
    """Given mnemonic + path, return the signing key."""
    return WalletKeyManager.from_mnemonic(mnemonic, derivation_path)


def load_credentials_file(path: Path) -> Dict[str, Any]:
    """
    Read a credentials/config mapping from JSON or YAML.

    .yaml / .yml are parsed with yaml.safe_load, anything else as JSON.
    Raises ConfigError if the file is missing or not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError("Credentials file not found", {"path": str(path)})
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(
            f"Failed to read credentials file: {exc}",
            {"path": str(path)},
        ) from exc
    if not isinstance(data, dict):
        raise ConfigError("Credentials file must contain a mapping", {"path": str(path)})
    return data


class KeyProvider(Protocol):
    def load_key(self) -> WalletKeyManager:
        ...


class PrivateKeyProvider:
    """Raw hex private key."""

    def __init__(self, private_key: str):
        self._private_key = private_key

    def load_key(self) -> WalletKeyManager:
        return WalletKeyManager.from_private_key(self._private_key)

    def __repr__(self) -> str:
        return "PrivateKeyProvider(<redacted>)"


class MnemonicKeyProvider:
    """BIP-39 phrase derived along a fixed path."""

    def __init__(self, mnemonic: str, derivation_path: str = DEFAULT_DERIVATION_PATH):
        self._mnemonic = mnemonic
        self.derivation_path = derivation_path

    def load_key(self) -> WalletKeyManager:
        return derive_key(self._mnemonic, self.derivation_path)

    def __repr__(self) -> str:
        return f"MnemonicKeyProvider(path={self.derivation_path!r})"


class CredentialsFileKeyProvider:
    """
    credentials.json (or .yaml) holding either:

        {"mnemonic": "...", "derivation_path": "m/44'/60'/0'/0/0"}
        {"private_key": "0x..."}

    A private_key entry wins when both are present.
    """

    def __init__(self, path: Path, derivation_path: Optional[str] = None):
        self.path = Path(path)
        self.derivation_path = derivation_path

    def load_key(self) -> WalletKeyManager:
        data = load_credentials_file(self.path)
        private_key = data.get("private_key")
        mnemonic    = data.get("mnemonic")
        if private_key:
            logger.debug("Loading private key from %s", self.path)
            return PrivateKeyProvider(private_key).load_key()
        if mnemonic:
            path = (
                self.derivation_path
                or data.get("derivation_path")
                or DEFAULT_DERIVATION_PATH
            )
            logger.debug("Deriving key from mnemonic in %s (path %s)", self.path, path)
            return MnemonicKeyProvider(mnemonic, path).load_key()
        raise ConfigError(
            "Credentials file has neither 'mnemonic' nor 'private_key'",
            {"path": str(self.path)},
        )

    def __repr__(self) -> str:
        return f"CredentialsFileKeyProvider(path={str(self.path)!r})"


class InteractiveKeyProvider:
    """
    Asks for a phrase (or hex key) through `prompt`.

    `prompt` is injected so the CLI can pass click.prompt with hidden input.
    """

    def __init__(
        self,
        prompt: Callable[[str], str],
        derivation_path: str = DEFAULT_DERIVATION_PATH,
    ):
        self._prompt = prompt
        self.derivation_path = derivation_path

    def load_key(self) -> WalletKeyManager:
        secret = (self._prompt("Mnemonic phrase or private key") or "").strip()
        if not secret:
            raise ConfigError("No key material entered")
        if len(secret.split()) == 1:
            return PrivateKeyProvider(secret).load_key()
        return MnemonicKeyProvider(secret, self.derivation_path).load_key()
