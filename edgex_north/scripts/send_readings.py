import argparse
import logging
import sys

import edgex_north
from edgex_north.utils.exceptions import ConfigError
from edgex_north.utils.script_utils import load_readings, load_yaml_config


def main(argv=None) -> int:

    # INPUT ARGUMENTS
    # =======================================================

    example_usage = """
    Example usage:

    Send a readings file using the plugin configuration in edgex.yaml:
    $ python -m edgex_north.scripts.send_readings --config ./configs/edgex.yaml --readings ./readings.json

    Send to a different host, with debug logging:
    $ python -m edgex_north.scripts.send_readings -c ./configs/edgex.yaml -r ./readings.json --host edgex.local -v
    """
    parser = argparse.ArgumentParser(
        description="Send a batch of readings to the EdgeX core-data service.",
        epilog=example_usage,
        formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Path to the plugin configuration file (edgex.yaml). Defaults are used if omitted.",
    )
    parser.add_argument(
        "--readings",
        "-r",
        type=str,
        required=True,
        help="Path to a JSON file holding the list of readings to send.",
    )
    parser.add_argument(
        "--host",
        type=str,
        help="Override the EdgeX hostname from the configuration file.",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Override the EdgeX core-data port from the configuration file.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("edgex_north.send_readings")

    # LOAD CONFIG AND READINGS
    # =======================================================

    config = load_yaml_config(args.config) if args.config else {}
    if args.host:
        config["host"] = args.host
    if args.port:
        config["port"] = args.port

    readings = load_readings(args.readings)
    logger.info("Loaded %d readings from %s", len(readings), args.readings)

    # INITIALIZE PLUGIN AND SEND
    # =======================================================
    try:
        handle = edgex_north.plugin_init(config)
    except ConfigError as e:
        logger.error("%s", e)
        return 2

    try:
        sent = edgex_north.plugin_send(handle, readings)
    finally:
        edgex_north.plugin_shutdown(handle)

    print(f"Sent {sent} readings to {handle.url}")
    return 0 if sent or not readings else 1


if __name__ == "__main__":
    sys.exit(main())
