"""Session-renewing client for the SecureWallet ledger service."""

__version__ = "0.1.0"
