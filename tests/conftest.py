"""
Shared fixtures: fixed, publicly known development keys.

The Hardhat/Anvil default mnemonic derives well-known accounts, so
expected addresses can be written down literally.
"""

import os

import pytest

from walletdns.core.crypto import WalletKeyManager

DEV_MNEMONIC    = "test test test test test test test test test test test junk"
DEV_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEV_ADDRESS     = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
DEV_ADDRESS_1   = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

TIMESTAMP  = "1700000000"
EXPIRATION = "1707776000"
BEFORE_EXPIRY = 1700000100


@pytest.fixture
def key():
    """The well-known development key (account 0)."""
    return WalletKeyManager.from_private_key(DEV_PRIVATE_KEY)


@pytest.fixture
def other_key():
    """A fresh random key unrelated to `key`."""
    return WalletKeyManager.generate()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep a developer's WALLETDNS_* variables out of the tests."""
    for name in list(os.environ):
        if name.startswith("WALLETDNS_"):
            monkeypatch.delenv(name, raising=False)
