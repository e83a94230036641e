"""
walletdns: Basic Usage Example

Demonstrates:
- Signing a proof with a fresh key
- Encoding it as a TXT record
- Verifying it, and watching tampering / domain swaps / expiry fail
"""

from walletdns import (
    WalletKeyManager,
    encode_txt_record,
    generate_proof,
    verify_txt_record,
)


def main():
    """Basic walletdns usage."""

    print("="*60)
    print("walletdns: Basic Usage Example")
    print("="*60)
    print()

    # 1️⃣ Key
    key = WalletKeyManager.generate()
    print(f"1️⃣ Wallet: {key.address}")
    print()

    # 2️⃣ Sign
    proof = generate_proof("example.com", key, expiration_days=90)
    record = encode_txt_record(proof)
    print("2️⃣ TXT record for aqua._wallet.example.com:")
    print(f"   {record}")
    print()

    # 3️⃣ Verify
    result = verify_txt_record(record, "example.com")
    print(f"3️⃣ example.com          → {result.outcome.value}")

    result = verify_txt_record(record, "example.org")
    print(f"   example.org          → {result.outcome.value}")

    tampered = record[:-3] + ("0" if record[-3] != "0" else "1") + record[-2:]
    result = verify_txt_record(tampered, "example.com")
    print(f"   tampered signature   → {result.outcome.value}")

    result = verify_txt_record(record, "example.com", now=int(proof.expiration) + 1)
    print(f"   after expiration     → {result.outcome.value}")
    print()


if __name__ == "__main__":
    main()
