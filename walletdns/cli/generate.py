"""
walletdns/cli/generate.py

walletdns generate: sign a domain proof with a local key.

Usage:
    walletdns generate example.com                         credentials.json in cwd
    walletdns generate example.com --credentials wallet.yaml
    walletdns generate example.com --expiration-days 30
    walletdns generate example.com --no-expiration         simple record
    walletdns generate example.com --interactive           prompt for the phrase
    walletdns generate example.com --format json

Key material (first match wins):
    --credentials FILE (environment key material is ignored),
    WALLETDNS_PRIVATE_KEY, WALLETDNS_MNEMONIC,
    WALLETDNS_CREDENTIALS_FILE, ./credentials.json

Exit codes:
    0  proof generated
    2  configuration or signing error
"""

import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click

from walletdns.cli.output import _Color, _emit_error, _row_info
from walletdns.config import WalletConfig
from walletdns.core.exceptions import WalletDNSError
from walletdns.core.keys import CredentialsFileKeyProvider, InteractiveKeyProvider
from walletdns.core.models import Proof
from walletdns.core.signing import generate_proof, generate_simple_proof
from walletdns.core.txt import encode_txt_record
from walletdns.resolver import record_name


@click.command(name="generate")
@click.argument("domain")
@click.option(
    "--credentials", "credentials",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON or YAML file with 'mnemonic' or 'private_key'.",
)
@click.option(
    "--derivation-path",
    default=None,
    help="BIP-44 path for mnemonic derivation.",
)
@click.option(
    "--expiration-days",
    type=int,
    default=None,
    help="Days until the proof expires (default 90).",
)
@click.option(
    "--no-expiration",
    is_flag=True,
    default=False,
    help="Produce a simple record without an expiration field.",
)
@click.option(
    "--interactive",
    is_flag=True,
    default=False,
    help="Prompt for the mnemonic or private key.",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
)
@click.option("--no-color", is_flag=True, default=False)
def generate_command(
    domain:          str,
    credentials:     Optional[str],
    derivation_path: Optional[str],
    expiration_days: Optional[int],
    no_expiration:   bool,
    interactive:     bool,
    fmt:             str,
    no_color:        bool,
) -> None:
    """Sign a proof that your wallet controls DOMAIN."""
    _Color.configure(not no_color and fmt == "text")

    try:
        config = WalletConfig.load(Path(credentials) if credentials else None)
        overrides = {}
        if derivation_path:
            overrides["derivation_path"] = derivation_path
        if expiration_days is not None:
            overrides["expiration_days"] = expiration_days
        if overrides:
            config = replace(config, **overrides)

        if interactive:
            provider = InteractiveKeyProvider(
                lambda text: click.prompt(text, hide_input=True, err=True),
                config.derivation_path,
            )
        elif credentials:
            provider = CredentialsFileKeyProvider(Path(credentials), derivation_path or None)
        else:
            provider = config.key_provider()

        name = record_name(domain, config.record_label)
        key  = provider.load_key()
        if no_expiration:
            proof = generate_simple_proof(domain, key)
        else:
            proof = generate_proof(domain, key, expiration_days=config.expiration_days)
    except (WalletDNSError, ValueError) as e:
        _emit_error("generate", str(e), fmt)
        sys.exit(2)

    payload = encode_txt_record(proof)

    if fmt == "json":
        click.echo(json.dumps({
            "walletdns_generate": {
                "record_name": name,
                "record":      payload,
                "length":      len(payload),
                "proof":       proof.to_dict(),
            }
        }, indent=2))
        return

    _output_human(proof, name, payload)


def _output_human(proof: Proof, name: str, payload: str) -> None:
    click.echo()
    click.echo(_Color.bold("  walletdns generate"))
    click.echo()
    click.echo(_row_info("Wallet", proof.wallet_address))
    click.echo(_row_info("Domain", proof.domain_name))
    click.echo(_row_info("Timestamp", proof.timestamp))
    if proof.expiration is not None:
        click.echo(_row_info("Expires", proof.expiration))
    click.echo()
    click.echo(f"  Put this in your DNS TXT record at {_Color.bold(name)} ({len(payload)} chars):")
    click.echo()
    click.echo(payload)
    click.echo()
