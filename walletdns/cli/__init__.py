"""
walletdns/cli/__init__.py

walletdns CLI: root Click command group.

Registered in pyproject.toml as:

    [project.scripts]
    walletdns = "walletdns.cli:cli"

Adding a new command:
    1. Create walletdns/cli/your_command.py with a @click.command()
    2. Add it to COMMANDS below
    That's it. No other files change.

Each command is self-contained; none falls through into another.
"""

import logging
from typing import Dict

import click

from walletdns.cli.external import assemble_command, message_command
from walletdns.cli.generate import generate_command
from walletdns.cli.verify import verify_command

COMMANDS: Dict[str, click.Command] = {
    "generate": generate_command,
    "message":  message_command,
    "assemble": assemble_command,
    "verify":   verify_command,
}


@click.group()
@click.version_option(package_name="walletdns")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging to stderr.")
def cli(verbose: bool) -> None:
    """
    walletdns: bind a domain to a wallet with a signed DNS TXT record.

    \b
    Commands:
      generate  Sign a proof with a local key and print the TXT record.
      message   Print the message an external wallet must sign.
      assemble  Build the TXT record from an external signature.
      verify    Check the proof published for a domain.

    \b
    Quick start:
      walletdns generate example.com --credentials credentials.json
      walletdns verify example.com
      walletdns verify example.com --quiet && echo "verified"
    """
    if verbose:
        logging.basicConfig()
        logging.getLogger("walletdns").setLevel(logging.DEBUG)


for _name, _command in COMMANDS.items():
    cli.add_command(_command, name=_name)
