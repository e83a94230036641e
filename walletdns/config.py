"""
walletdns/config.py

Wallet configuration.

Sources, lowest precedence first:
    1. defaults
    2. a JSON or YAML file            WalletConfig.from_file(path)
    3. WALLETDNS_* environment vars   WalletConfig.from_env()
    4. explicit CLI options           config.merged(...)
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping, Optional

from walletdns.core.exceptions import ConfigError
from walletdns.core.keys import (
    CredentialsFileKeyProvider,
    KeyProvider,
    MnemonicKeyProvider,
    PrivateKeyProvider,
    load_credentials_file,
)
from walletdns.core.models import (
    DEFAULT_DERIVATION_PATH,
    DEFAULT_EXPIRATION_DAYS,
    RECORD_LABEL,
)

ENV_PREFIX = "WALLETDNS_"
DEFAULT_CREDENTIALS_FILE = "credentials.json"


@dataclass(frozen=True)
class WalletConfig:
    mnemonic:         Optional[str] = None
    private_key:      Optional[str] = None
    derivation_path:  str = DEFAULT_DERIVATION_PATH
    credentials_file: Optional[str] = None
    record_label:     str = RECORD_LABEL
    expiration_days:  int = DEFAULT_EXPIRATION_DAYS
    dns_timeout:      float = 3.0

    def __post_init__(self):
        if int(self.expiration_days) <= 0:
            raise ConfigError(
                "expiration_days must be positive",
                {"expiration_days": self.expiration_days},
            )
        if float(self.dns_timeout) <= 0:
            raise ConfigError(
                "dns_timeout must be positive",
                {"dns_timeout": self.dns_timeout},
            )

    # ── Construction ──────────────────────────────────────────

    @classmethod
    def from_mapping(cls, data: Mapping) -> "WalletConfig":
        """Build from a dict, ignoring unknown keys and None values."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}
        try:
            if "expiration_days" in values:
                values["expiration_days"] = int(values["expiration_days"])
            if "dns_timeout" in values:
                values["dns_timeout"] = float(values["dns_timeout"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid numeric setting: {exc}") from exc
        return cls(**values)

    @classmethod
    def from_file(cls, path: Path) -> "WalletConfig":
        """Load from JSON or YAML. The file itself is remembered as credentials_file."""
        data = dict(load_credentials_file(path))
        data.setdefault("credentials_file", str(path))
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WalletConfig":
        environ = os.environ if environ is None else environ
        data = {}
        for f in fields(cls):
            value = environ.get(ENV_PREFIX + f.name.upper())
            if value:
                data[f.name] = value
        # Historical name for credentials_file
        if "credentials_file" not in data and environ.get(ENV_PREFIX + "CREDENTIALS"):
            data["credentials_file"] = environ[ENV_PREFIX + "CREDENTIALS"]
        return cls.from_mapping(data)

    @classmethod
    def load(
        cls,
        path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "WalletConfig":
        """Defaults, then file (if given), then environment."""
        base = cls.from_file(path) if path is not None else cls()
        return base.merged(cls.from_env(environ))

    def merged(self, other: "WalletConfig") -> "WalletConfig":
        """Overlay every field of `other` that differs from the default."""
        defaults = WalletConfig()
        changes = {
            f.name: getattr(other, f.name)
            for f in fields(self)
            if getattr(other, f.name) != getattr(defaults, f.name)
        }
        return replace(self, **changes)

    # ── Key sourcing ──────────────────────────────────────────

    def key_provider(self) -> KeyProvider:
        """
        private_key, then mnemonic, then a credentials file.

        With nothing configured, ./credentials.json is tried if present.
        """
        if self.private_key:
            return PrivateKeyProvider(self.private_key)
        if self.mnemonic:
            return MnemonicKeyProvider(self.mnemonic, self.derivation_path)
        path = self.credentials_file
        if not path and Path(DEFAULT_CREDENTIALS_FILE).exists():
            path = DEFAULT_CREDENTIALS_FILE
        if path:
            derivation = (
                self.derivation_path
                if self.derivation_path != DEFAULT_DERIVATION_PATH
                else None
            )
            return CredentialsFileKeyProvider(Path(path), derivation)
        raise ConfigError(
            "No key material configured",
            {"hint": f"set {ENV_PREFIX}MNEMONIC or pass --credentials"},
        )

    def __repr__(self) -> str:
        return (
            f"WalletConfig(derivation_path={self.derivation_path!r}, "
            f"credentials_file={self.credentials_file!r}, "
            f"record_label={self.record_label!r}, "
            f"expiration_days={self.expiration_days}, "
            f"has_mnemonic={bool(self.mnemonic)}, "
            f"has_private_key={bool(self.private_key)})"
        )
