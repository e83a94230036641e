"""
walletdns/cli/external.py

Two-step flow for keys held by an external wallet (MetaMask, hardware):

    1. walletdns message example.com
         prints the exact text to personal_sign, plus the timestamps used
    2. walletdns assemble example.com --wallet 0x.. --timestamp T \\
           --expiration E --sig 0x..
         prints the TXT record

assemble performs no checks; run `walletdns verify --record` to check it.
"""

import json
from typing import Optional

import click

from walletdns.cli.output import _Color, _row_info
from walletdns.core.models import (
    DEFAULT_EXPIRATION_DAYS,
    ExpiringVariant,
    SignatureMethod,
    SimpleVariant,
)
from walletdns.core.signing import proof_from_signature, signature_request
from walletdns.core.time import expiration_after, unix_now, unix_timestamp
from walletdns.core.txt import encode_txt_record
from walletdns.resolver import record_name


@click.command(name="message")
@click.argument("domain")
@click.option("--timestamp", type=int, default=None, help="Unix seconds (default: now).")
@click.option(
    "--expiration-days",
    type=click.IntRange(min=1),
    default=DEFAULT_EXPIRATION_DAYS,
    show_default=True,
)
@click.option("--no-expiration", is_flag=True, default=False)
@click.option("--wallet", default="", help="Address expected to sign, if known.")
@click.option(
    "--format", "fmt",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
)
def message_command(
    domain:          str,
    timestamp:       Optional[int],
    expiration_days: int,
    no_expiration:   bool,
    wallet:          str,
    fmt:             str,
) -> None:
    """Print the message an external wallet must sign for DOMAIN."""
    now = unix_now() if timestamp is None else timestamp
    if no_expiration:
        variant = SimpleVariant()
    else:
        variant = ExpiringVariant(expiration=expiration_after(expiration_days, now))

    request = signature_request(
        domain, unix_timestamp(now), variant,
        address=wallet,
        method=SignatureMethod.METAMASK,
    )

    if fmt == "json":
        out = request.to_dict()
        out["timestamp"] = unix_timestamp(now)
        out["expiration"] = getattr(variant, "expiration", None)
        click.echo(json.dumps({"walletdns_message": out}, indent=2))
        return

    click.echo()
    click.echo(_row_info("Timestamp", unix_timestamp(now)))
    if isinstance(variant, ExpiringVariant):
        click.echo(_row_info("Expiration", variant.expiration))
    click.echo()
    click.echo("  Sign this message with personal_sign:")
    click.echo()
    click.echo(request.message)
    click.echo()


@click.command(name="assemble")
@click.argument("domain")
@click.option("--wallet", required=True, help="Checksummed signer address.")
@click.option("--timestamp", required=True, help="Timestamp that was signed.")
@click.option("--expiration", default=None, help="Expiration that was signed, if any.")
@click.option("--sig", "signature", required=True, help="0x-prefixed signature.")
@click.option("--no-color", is_flag=True, default=False)
def assemble_command(
    domain:     str,
    wallet:     str,
    timestamp:  str,
    expiration: Optional[str],
    signature:  str,
    no_color:   bool,
) -> None:
    """Build the TXT record for DOMAIN from an external signature."""
    _Color.configure(not no_color)
    variant = ExpiringVariant(expiration) if expiration else SimpleVariant()
    proof = proof_from_signature(domain, wallet, timestamp, variant, signature)
    payload = encode_txt_record(proof)

    click.echo()
    click.echo(f"  Put this in your DNS TXT record at {_Color.bold(record_name(domain))} ({len(payload)} chars):")
    click.echo()
    click.echo(payload)
    click.echo()
