"""
walletdns Exception Hierarchy

All exceptions inherit from WalletDNSError for easy catching.
"""


class WalletDNSError(Exception):
    """Base exception for all walletdns errors"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class MalformedRecordError(WalletDNSError):
    """Raised when a TXT record is missing required keys or cannot be parsed"""
    pass


class SignatureInvalidError(WalletDNSError):
    """Raised when the recovered signer does not match the declared wallet"""
    pass


class ProofExpiredError(WalletDNSError):
    """Raised when a proof's expiration timestamp has passed"""
    pass


class SigningFailedError(WalletDNSError):
    """Raised when key derivation or signing rejects its input"""
    pass


class ResolutionError(WalletDNSError):
    """Raised when the DNS lookup for a proof record fails"""
    pass


class RecordNotFoundError(ResolutionError):
    """Raised when no proof TXT record exists for a domain"""
    pass


class ConfigError(WalletDNSError):
    """Raised when wallet configuration is missing or invalid"""
    pass
