"""
walletdns/cli/verify.py

walletdns verify: check a domain's published wallet proof
==========================================================

Usage:
    walletdns verify <domain>                        Resolve aqua._wallet.<domain>
    walletdns verify <domain> --record 'wallet=..'   Skip DNS, check a raw record
    walletdns verify <domain> --expect expiring      Reject simple records
    walletdns verify <domain> --format json          Machine-readable JSON
    walletdns verify <domain> --format compact       One-line pipeline output
    walletdns verify <domain> --quiet                Exit code only

Exit codes (POSIX-standard, shell-scriptable):
    0  Proof valid
    1  Proof not valid  (signature mismatch or expired)
    2  Error  (no record, DNS failure, malformed record)
"""

import json
import sys
from typing import Optional

import click

from walletdns.cli.output import _Color, _emit_error, _row_fail, _row_info, _row_ok
from walletdns.config import WalletConfig
from walletdns.core.exceptions import ConfigError, ResolutionError
from walletdns.core.models import ExpiringVariant, SimpleVariant
from walletdns.core.verification import (
    VerificationOutcome,
    VerificationResult,
    verify_txt_record,
)
from walletdns.resolver import TxtResolver, record_name

_EXPECT = {
    "any":      None,
    "simple":   SimpleVariant,
    "expiring": ExpiringVariant,
}

_EXIT_CODES = {
    VerificationOutcome.VALID:             0,
    VerificationOutcome.SIGNATURE_INVALID: 1,
    VerificationOutcome.PROOF_EXPIRED:     1,
    VerificationOutcome.MALFORMED_RECORD:  2,
}


@click.command(name="verify")
@click.argument("domain")
@click.option("--record", default=None, help="Raw TXT value; skips the DNS lookup.")
@click.option(
    "--expect",
    type=click.Choice(sorted(_EXPECT), case_sensitive=False),
    default="any",
    show_default=True,
    help="Record format the proof must use.",
)
@click.option("--now", type=int, default=None, help="Verify as of this Unix time.")
@click.option("--timeout", type=float, default=None, help="DNS timeout in seconds.")
@click.option(
    "--format", "fmt",
    type=click.Choice(["text", "json", "compact"], case_sensitive=False),
    default="text",
    show_default=True,
)
@click.option("--quiet", "-q", is_flag=True, default=False, help="Exit code only.")
@click.option("--no-color", is_flag=True, default=False)
def verify_command(
    domain:   str,
    record:   Optional[str],
    expect:   str,
    now:      Optional[int],
    timeout:  Optional[float],
    fmt:      str,
    quiet:    bool,
    no_color: bool,
) -> None:
    """Verify the wallet proof published for DOMAIN."""
    _Color.configure(not no_color and fmt == "text")

    try:
        config = WalletConfig.from_env()
        name   = record_name(domain, config.record_label)
    except (ConfigError, ValueError) as e:
        _emit_error("verify", str(e), fmt, quiet)
        sys.exit(2)

    if record is None:
        resolver = TxtResolver(
            timeout=  timeout or config.dns_timeout,
            lifetime= (timeout or config.dns_timeout) * 2,
            label=    config.record_label,
        )
        try:
            record = resolver.fetch_proof_record(domain)
        except ResolutionError as e:
            _emit_error("verify", str(e), fmt, quiet)
            sys.exit(2)

    result = verify_txt_record(record, domain, now=now, variant=_EXPECT[expect.lower()])

    if not quiet:
        if fmt == "json":
            out = result.to_dict()
            out["record_name"] = name
            click.echo(json.dumps({"walletdns_verify": out}, indent=2))
        elif fmt == "compact":
            _output_compact(result)
        else:
            _output_human(result, name)

    sys.exit(_EXIT_CODES[result.outcome])


# ── Human output ──────────────────────────────────────────────────────────────

def _output_human(result: VerificationResult, name: str) -> None:
    click.echo()
    click.echo(_Color.bold("  walletdns verify"))
    click.echo()
    click.echo(_row_info("Record", name))

    proof = result.proof
    if proof is not None:
        click.echo(_row_info("Wallet", proof.wallet_address))
        click.echo(_row_info("Timestamp", proof.timestamp))

    outcome = result.outcome
    if outcome is VerificationOutcome.MALFORMED_RECORD:
        click.echo(_row_fail("Record", result.reason))
    elif outcome is VerificationOutcome.SIGNATURE_INVALID:
        click.echo(_row_fail("Signature", result.reason))
    else:
        click.echo(_row_ok("Signature", f"signed by {result.recovered_address}"))
        if proof is not None and proof.expiration is not None:
            if outcome is VerificationOutcome.PROOF_EXPIRED:
                click.echo(_row_fail("Expiration", f"{proof.expiration} (expired)"))
            else:
                click.echo(_row_ok("Expiration", proof.expiration))

    click.echo()
    if result.valid:
        click.echo(_Color.green(_Color.bold(f"  ✅  VALID  ·  {result.domain}")))
    else:
        click.echo(_Color.red(_Color.bold(
            f"  ❌  INVALID  ·  {result.domain}  ·  {outcome.value}"
        )))
    click.echo()


# ── Compact output ────────────────────────────────────────────────────────────

def _output_compact(result: VerificationResult) -> None:
    """
    Single-line output for shell pipelines.

    Format:
        VALID     example.com  0xAbC...  valid
        INVALID   example.com  0xAbC...  proof_expired
    """
    status = "VALID" if result.valid else "INVALID"
    wallet = result.proof.wallet_address if result.proof else "-"
    color  = _Color.green if result.valid else _Color.red
    click.echo(
        color(f"{status:<8}") + f"  {result.domain}  {wallet}  {result.outcome.value}"
    )
