"""
DAP CLI - Command Line Interface for Dutch Auction Pricing

Main entry point for all CLI commands.
"""

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError

from dap.core.config import load_config
from dap.core.errors import PricingError
from dap.utils.logger import setup_logging, get_logger

logger = get_logger("cli")


def load_order(path: str):
    """Read and validate an order file."""
    from dap.cli.schemas import parse_order

    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}")

    try:
        return parse_order(data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid order file {path}:\n{e}")


def resolved_to_dict(resolved) -> dict:
    from dap.crypto import bytes_to_hex

    return {
        "order_hash": bytes_to_hex(resolved.hash),
        "input": {
            "token": bytes_to_hex(resolved.input.token),
            "amount": str(resolved.input.amount),
            "max_amount": str(resolved.input.max_amount),
        },
        "outputs": [
            {
                "token": bytes_to_hex(o.token),
                "amount": str(o.amount),
                "recipient": bytes_to_hex(o.recipient),
            }
            for o in resolved.outputs
        ],
    }


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--env-file", default=None, help="dotenv file to read DAP_* settings from")
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx, debug, env_file):
    """Dutch Auction Pricing - quote, hash and cosign orders"""
    config = load_config(env_file)

    level = logging.DEBUG if debug else getattr(logging, config.log_level, logging.INFO)
    setup_logging(level=level, log_dir=str(config.log_dir), log_to_file=config.log_to_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


# =============================================================================
# Order Commands
# =============================================================================


@cli.command("quote")
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--block", "block_number", type=int, required=True, help="Current block number")
@click.option("--timestamp", type=int, required=True, help="Current block timestamp")
@click.option("--base-fee", type=int, default=0, help="Block base fee (wei)")
@click.option("--gas-price", type=int, default=0, help="Fill gas price (wei)")
@click.option("--filler", default=None, help="Filler address (0x...)")
@click.option("--chain-id", type=int, default=None, help="Chain id (default from config)")
@click.pass_context
def quote(ctx, order_file, block_number, timestamp, base_fee, gas_price, filler, chain_id):
    """Resolve an order's amounts at a given block"""
    from dap.core.order import ExecutionContext, resolve
    from dap.crypto import address_from_hex

    order = load_order(order_file)
    try:
        exec_ctx = ExecutionContext(
            block_number=block_number,
            timestamp=timestamp,
            chain_id=chain_id if chain_id is not None else ctx.obj["config"].chain_id,
            base_fee=base_fee,
            gas_price=gas_price,
            filler=address_from_hex(filler),
        )
        resolved = resolve(order, exec_ctx)
    except PricingError as e:
        logger.error(f"Quote failed: {type(e).__name__}: {e}")
        raise click.ClickException(f"{type(e).__name__}: {e}")
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(json.dumps(resolved_to_dict(resolved), indent=2))


@cli.command("hash")
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False))
def hash_cmd(order_file):
    """Print an order's struct hash"""
    from dap.core.order import hash_order
    from dap.crypto import bytes_to_hex

    order = load_order(order_file)
    try:
        click.echo(bytes_to_hex(hash_order(order)))
    except PricingError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}")


@cli.command("cosign")
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--key", default=None, help="Cosigner private key hex (default: DAP_COSIGNER_KEY)")
@click.option("--chain-id", type=int, default=None, help="Chain id (default from config)")
@click.pass_context
def cosign_cmd(ctx, order_file, key, chain_id):
    """Cosign an order's cosigner data"""
    from dap.core.cosigner import cosign
    from dap.core.order import hash_order
    from dap.crypto import bytes_to_hex, hex_to_bytes, private_key_to_address

    config = ctx.obj["config"]
    key = key or config.cosigner_private_key
    if not key:
        raise click.ClickException("No cosigner key: pass --key or set DAP_COSIGNER_KEY")

    order = load_order(order_file)
    if not hasattr(order, "cosigner_data"):
        raise click.ClickException(f"{type(order).__name__} has no cosigner data")

    try:
        private_key = hex_to_bytes(key)
        signer = private_key_to_address(private_key)
    except ValueError as e:
        raise click.ClickException(f"Invalid cosigner key: {e}")

    if signer != order.cosigner:
        logger.warning(
            f"Signing key {bytes_to_hex(signer)} is not the order cosigner {bytes_to_hex(order.cosigner)}"
        )

    chain_id = chain_id if chain_id is not None else config.chain_id
    try:
        signature = cosign(hash_order(order), chain_id, order.cosigner_data, private_key)
    except PricingError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}")
    click.echo(bytes_to_hex(signature))


@cli.command("decode-extra-data")
@click.argument("data_hex")
def decode_extra_data_cmd(data_hex):
    """Decode legacy packed cosigner extra data"""
    from dap.core.cosigner import decode_extra_data
    from dap.crypto import bytes_to_hex, hex_to_bytes

    try:
        extra = decode_extra_data(hex_to_bytes(data_hex))
    except ValueError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}")

    click.echo(json.dumps({
        "exclusive_filler": bytes_to_hex(extra.exclusive_filler) if extra.exclusive_filler is not None else None,
        "input_override": str(extra.input_override) if extra.input_override is not None else None,
        "output_overrides": (
            [str(a) for a in extra.output_overrides] if extra.output_overrides is not None else None
        ),
    }, indent=2))


# =============================================================================
# Key Commands
# =============================================================================


@cli.command("keygen")
def keygen():
    """Generate a cosigner keypair"""
    from dap.crypto import generate_keypair

    kp = generate_keypair()
    click.echo(f"Address:     {kp.address_hex}")
    click.echo(f"Private key: 0x{kp.private_key_hex}")
    click.echo("⚠️  Store the private key in DAP_COSIGNER_KEY, never in an order file")


if __name__ == "__main__":
    cli()
