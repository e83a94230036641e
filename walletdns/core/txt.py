"""
walletdns/core/txt.py

TXT record codec.

    wallet=<addr>&timestamp=<t>&expiration=<e>&sig=<hex>    (expiring)
    wallet=<addr>&timestamp=<t>&sig=<hex>                   (simple)

encode_txt_record() writes TxtField.ENCODE_ORDER and nothing else.
decode_txt_record() accepts any order, ignores unknown keys, and
raises MalformedRecordError on missing required keys.
"""

import warnings
from typing import Dict

from walletdns.core.exceptions import MalformedRecordError
from walletdns.core.models import (
    ExpiringVariant,
    Proof,
    ProofVariant,
    SimpleVariant,
    TxtField,
    unknown_variant,
)


def encode_txt_record(proof: Proof) -> str:
    fields = [
        (TxtField.WALLET,    proof.wallet_address),
        (TxtField.TIMESTAMP, proof.timestamp),
    ]
    if isinstance(proof.variant, ExpiringVariant):
        fields.append((TxtField.EXPIRATION, proof.variant.expiration))
    elif not isinstance(proof.variant, SimpleVariant):
        raise unknown_variant(proof.variant)
    fields.append((TxtField.SIGNATURE, proof.signature))
    return "&".join(f"{key}={value}" for key, value in fields)


def decode_txt_record(txt: str) -> Dict[str, str]:
    """
    Split a TXT string into its known fields.

    Resolvers sometimes hand back the value still wrapped in quotes;
    surrounding quotes and whitespace are stripped first. Repeated keys
    keep the first value and emit a warning.
    """
    if not isinstance(txt, str):
        raise MalformedRecordError("TXT record must be a string")

    raw = txt.strip().strip('"').strip()
    if not raw:
        raise MalformedRecordError("TXT record is empty")

    known  = set(TxtField.ENCODE_ORDER)
    fields: Dict[str, str] = {}

    for segment in raw.split("&"):
        if not segment:
            continue
        if "=" not in segment:
            raise MalformedRecordError(
                "TXT segment is not key=value",
                {"segment": segment[:32]},
            )
        key, value = segment.split("=", 1)
        key = key.strip()
        if key not in known:
            continue
        if key in fields:
            warnings.warn(f"Duplicate TXT key {key!r}; keeping the first value")
            continue
        fields[key] = value.strip()

    missing = [key for key in TxtField.REQUIRED if not fields.get(key)]
    if missing:
        raise MalformedRecordError(
            "TXT record is missing required keys",
            {"missing": ",".join(missing)},
        )

    for key in (TxtField.TIMESTAMP, TxtField.EXPIRATION):
        if key in fields and not (fields[key].isascii() and fields[key].isdigit()):
            raise MalformedRecordError(
                f"TXT field {key!r} is not Unix seconds",
                {key: fields[key][:32]},
            )

    return fields


def variant_from_fields(fields: Dict[str, str]) -> ProofVariant:
    """The variant a decoded record was produced under."""
    if TxtField.EXPIRATION in fields:
        return ExpiringVariant(expiration=fields[TxtField.EXPIRATION])
    return SimpleVariant()


def parse_txt_record(txt: str, domain: str) -> Proof:
    """
    Decode a TXT string into a Proof bound to `domain`.

    The domain is never read from the record; it is the name the
    record was fetched for.
    """
    fields = decode_txt_record(txt)
    return Proof(
        wallet_address= fields[TxtField.WALLET],
        domain_name=    domain,
        timestamp=      fields[TxtField.TIMESTAMP],
        variant=        variant_from_fields(fields),
        signature=      fields[TxtField.SIGNATURE],
    )
