#!/usr/bin/env python3
import argparse
import logging
import time

import can

from BitPacking import (
    BitField,
    BitFieldListener,
    FieldLogConfig,
    IndexOutOfRangeError,
    PrintListener,
    apply_toggles,
    intTypes,
    render,
)

logger = logging.getLogger(__name__)


def int_literal(value):
    """
    Parses any python int literal (e.g. 5, -3, 0x1F, 0b101)
    """
    try:
        return int(value, 0)  # Automatically detects base (e.g., hex)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}")


def valid_bit_index(value):
    """
    Validates that the passed value is a non-negative bit index.
    The upper bound depends on --type and is checked once the field exists.
    """
    ivalue = int_literal(value)
    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"Bit index must be >= 0, but got: {value}")
    return ivalue


def valid_offset(value):
    """
    Validates that the passed value is a non-negative byte offset.
    """
    ivalue = int_literal(value)
    if ivalue < 0:
        raise argparse.ArgumentTypeError(f"Offset must be >= 0, but got: {value}")
    return ivalue


def parse_cli():
    """Parses commandline args (using argparse) for the bitfield inspector."""

    parser = argparse.ArgumentParser(
        description="Inspect and edit the bits of a fixed-width integer\n"
    )

    parser.add_argument(
        "value",
        type=int_literal,
        help="Integer to inspect (or listen mode's initial value). Accepts 0x and 0b prefixes.",
    )

    parser.add_argument(
        "-t",
        "--type",
        default="int",
        choices=[t.name.lower() for t in intTypes],
        help="Declared integer type of the value, default=int",
    )

    parser.add_argument(
        "-l",
        "--labels",
        nargs="*",
        default=[],
        help="Labels for bits 0, 1, 2, ...",
    )

    # Operations are applied in the order: set, clear, toggle
    parser.add_argument("--set", action="append", default=[], type=valid_bit_index, help="Bit to set to 1.")
    parser.add_argument("--clear", action="append", default=[], type=valid_bit_index, help="Bit to clear to 0.")
    parser.add_argument("--toggle", action="append", default=[], type=valid_bit_index, help="Bit to flip.")

    # Listen mode
    parser.add_argument("--channel", help="CAN channel to listen on, e.g. can0. Enables listen mode.")
    parser.add_argument("--interface", default="socketcan", help="python-can interface, default=socketcan")
    parser.add_argument("--can_id", type=int_literal, help="CAN ID of the frame carrying the field.")
    parser.add_argument("--offset", type=valid_offset, default=0, help="Byte offset of the field in the payload.")
    parser.add_argument("--duration", type=float, default=10.0, help="Seconds to listen for.")

    # File path to write logs too
    parser.add_argument(
        "-ld",
        "--log_dir",
        type=str,
        default="./logs",
        help="Path at which to create log files.",
    )

    # File name for logs
    parser.add_argument(
        "-f",
        "--file_name",
        type=str,
        default="bitfield",
        help="Base name for log files.",
    )

    parser.add_argument(
        "-log",
        "--loglevel",
        default="warning",
        choices=["notset", "debug", "info", "warning", "error", "critical"],
        help="Provide logging level. Example --loglevel debug, default=warning",
    )
    return parser


def build_field(parser, args):
    """Creates the field from args and applies the requested bit operations."""
    int_type = intTypes[args.type.upper()]
    try:
        field = BitField.from_names("value", args.labels, int_type=int_type, value=args.value)
        for i in args.set:
            field.set_bit(i, True)
        for i in args.clear:
            field.set_bit(i, False)
        apply_toggles(field, args.toggle)
    except (ValueError, IndexOutOfRangeError) as e:
        parser.error(str(e))
    return field


def listen(field, args):
    """Logs (and prints) the field from frames with --can_id for --duration seconds."""
    fields = {field.name: field}
    log_config = {
        field.name: FieldLogConfig(enabled=True, arbitration_id=args.can_id, offset=args.offset)
    }
    with can.Bus(channel=args.channel, interface=args.interface) as bus:
        csv_listener = BitFieldListener(
            fields, log_dir=args.log_dir, log_name=args.file_name, log_config=log_config
        )
        print_listener = PrintListener(fields, log_config)
        # Reception and logging of CAN messages is handled by the notifier thread
        notifier = can.Notifier(bus, [csv_listener, print_listener])
        logger.info("Listening on %s for %ss", args.channel, args.duration)
        try:
            time.sleep(args.duration)
        finally:
            notifier.stop()
            csv_listener.stop()


def main(argv=None):
    parser = parse_cli()
    args = parser.parse_args(argv)

    # ---- Configure Stdout Logging ---- #
    logging.basicConfig(
        level=args.loglevel.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    if args.channel and args.can_id is None:
        parser.error("--can_id is required with --channel")

    field = build_field(parser, args)
    if args.channel:
        listen(field, args)
    else:
        print(render(field))
    return 0


# This allows the cli to be called independently for testing purposes.
if __name__ == "__main__":
    raise SystemExit(main())
