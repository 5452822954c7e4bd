# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Command line entry point for the Simple Azure IoT Certs demo"""

import argparse
import logging
import sys
from . import console
from .config import resolve_connection_string
from .constant import VERSION
from .exceptions import ConfigurationError
from .session import Session

logger = logging.getLogger(__name__)


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="simple-iot-certs",
        description="Add devices to an Azure IoT Hub registry, optionally with X509 certificates",
    )
    parser.add_argument(
        "connection_string",
        nargs="?",
        default=None,
        help="IoT Hub connection string (e.g. the iothubowner shared access policy)",
    )
    parser.add_argument(
        "--websockets",
        action="store_true",
        help="Connect devices using MQTT over websockets",
    )
    parser.add_argument(
        "--use-secondary",
        dest="use_secondary",
        action="store_true",
        help="Authenticate the telemetry connection with the secondary key or certificate",
    )
    parser.add_argument(
        "--pfx-pass-phrase",
        dest="pfx_pass_phrase",
        default=None,
        help="Pass phrase protecting the PFX credentials (the embedded ones have none)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + VERSION)
    return parser


def _configure_logging(log_level):
    logging.basicConfig(level=log_level)
    if log_level != "DEBUG":
        logging.getLogger("paho").setLevel(level=logging.WARNING)
        logging.getLogger("urllib3").setLevel(level=logging.WARNING)


def main(argv=None, input_func=input, output_func=print, session_factory=Session):
    """Run the demo.

    :returns: The process exit status.
    """
    args = _build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    console.print_banner(output_func)
    try:
        connection_string = resolve_connection_string(
            argument=args.connection_string,
            prompt=lambda: console.prompt_connection_string(input_func, output_func),
        )
    except ConfigurationError as e:
        logger.error(str(e))
        console.print_missing_connection_string(output_func)
        return 1

    session = session_factory(
        connection_string,
        websockets=args.websockets,
        use_secondary=args.use_secondary,
        pfx_pass_phrase=args.pfx_pass_phrase,
    )
    app = console.ConsoleApp(session, input_func=input_func, output_func=output_func)
    app.print_hostname()
    app.run()
    return 0


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("User initiated exit. Exiting")


if __name__ == "__main__":
    run()
