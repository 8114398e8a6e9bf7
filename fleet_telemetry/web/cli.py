"""Command-line interface for the fleet telemetry push server."""

import logging
import sys

import click

from fleet_telemetry.config.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    FLEET_SIZE,
    PATH_STEPS,
    PROFILE_NAMES,
    TICK_INTERVAL_S,
    UPDATE_PROBABILITY,
)
from fleet_telemetry.config.schema import ServerConfig
from fleet_telemetry.web.server import run_server


@click.command()
@click.option("--host", default=DEFAULT_HOST, help="Host to bind.")
@click.option("--port", default=DEFAULT_PORT, envvar="PORT", type=int, help="Port to bind (env: PORT).")
@click.option("--fleet-size", default=FLEET_SIZE, help="Number of simulated vehicles.")
@click.option("--path-steps", default=PATH_STEPS, help="Points per vehicle path.")
@click.option("--profile", default="base", type=click.Choice(PROFILE_NAMES), help="Tuning profile.")
@click.option("--tick-interval", default=TICK_INTERVAL_S, help="Seconds between ticks.")
@click.option("--update-probability", default=UPDATE_PROBABILITY, help="Per-vehicle update chance per tick.")
@click.option("--seed", default=None, type=int, help="RNG seed (random if omitted).")
@click.option("--validate", is_flag=True, help="Range-check every updated vehicle.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def main(host, port, fleet_size, path_steps, profile, tick_interval, update_probability,
         seed, validate, verbose):
    """Simulated vehicle fleet streaming telemetry to dashboard clients."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        config = ServerConfig(
            host=host,
            port=port,
            tick_interval_s=tick_interval,
            update_probability=update_probability,
            fleet_size=fleet_size,
            path_steps=path_steps,
            profile=profile,
            seed=seed,
            validate=validate,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    try:
        run_server(config)
    except OSError as exc:
        logger.error(f"Could not listen on {host}:{port}: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Stopped by user")


if __name__ == "__main__":
    main()
