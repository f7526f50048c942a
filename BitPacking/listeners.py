#!/usr/bin/env python3

import csv
import logging
import os
import time
from datetime import datetime

from can import Listener, Message

from .api import decode_field
from .fields import FieldLogConfig
from .inspector import render

logger = logging.getLogger(__name__)


def _load_config(log_config):
    """Accepts FieldLogConfig objects or plain dicts, keyed by field name."""
    return {
        name: (FieldLogConfig(**cfg) if isinstance(cfg, dict) else cfg)
        for name, cfg in log_config.items()
    }


def _matching(fields, log_config, msg):
    """Yields (name, decoded field, config) for each enabled field carried by msg."""
    for name, config in log_config.items():
        if not config.enabled or config.arbitration_id != msg.arbitration_id:
            continue
        template = fields.get(name)
        if template is None:
            logger.debug("No template for configured field: %s", name)
            continue
        try:
            decoded = decode_field(msg, template, config.offset)
        except ValueError as e:
            logger.warning("Could not decode %s from %X: %s", name, msg.arbitration_id, e)
            continue
        yield name, decoded, config


class PrintListener(Listener):
    """Prints the inspector view of every configured field as it arrives."""

    def __init__(self, fields, log_config):
        self.fields = fields
        self.log_config = _load_config(log_config)

    def on_message_received(self, msg: Message) -> None:
        for _, decoded, _ in _matching(self.fields, self.log_config, msg):
            print(render(decoded))

    def __call__(self, msg: Message) -> None:
        self.on_message_received(msg)

    def stop(self) -> None:
        pass

    def on_error(self, exc: Exception) -> None:
        logger.error("PrintListener error: %s", exc)


class BitFieldListener(Listener):
    """
    CSV listener that logs the bits of fields carried in CAN frames.
    Can specify:
    - Which frame (and byte offset) each field is read from
    - Which bits of each field to log
    - Log file name
    """

    def __init__(self, fields, log_dir, log_name, log_config):
        """

        args:
            - fields: A dict of BitField templates, keyed by field name.
            - log_dir: Path to a dir for logging.
            - log_name: Base name for the CSV log.
            - log_config: A dict of FieldLogConfig objects (or plain dicts).
        """
        self.fields = fields
        self.log_dir = log_dir
        self.log_name = log_name

        # Build headers first so a bad config leaves no file behind
        self.log_config = _load_config(log_config)
        logger.info("Configuring CSVLogging with:\n%s", self.log_config)
        header_row = self._setup_table()

        # Create the csv file
        os.makedirs(log_dir, exist_ok=True)
        date_slug = "_" + time.strftime("%Y-%m-%d_%H-%M-%S")
        self.log_path = os.path.join(log_dir, log_name + date_slug + ".csv")
        if os.path.exists(self.log_path):
            logger.warning("Overwriting: %s", self.log_path)
        logger.info("Creating: %s", self.log_path)
        self.csv_file = open(self.log_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)

        # Write headers
        logger.debug("Writing: %s", header_row)
        self.csv_writer.writerow(header_row)

    def _setup_table(self):
        """Creates csv header and calculates csv leaders and trailers for each field that is configured to
        be logged."""

        default_headers = ["timestamp", "CAN ID", "field", "value", "binary"]

        # Dynamic Header Setup
        #  0 1 2 3 4 5  Index
        # |P|P|X|X|N|N|
        #      ^ ^-- end
        #      |---- beg(in)
        #
        # leader  - # of empty cells prepended to a field's bits = beg
        # trailer - # of empty cells appended to a field's bits = len(table) - end
        headers = []
        for name, config in self.log_config.items():
            template = self.fields.get(name)
            if not config.enabled or template is None:
                continue
            logger.debug("Setting up: %s", name)

            config._csv_beg = len(headers)
            headers += [f"{name}.{col}" for col in template.csv_header(config.bits)]
            config._csv_end = len(headers)

        table_len = len(headers)
        for config in self.log_config.values():
            config._csv_leader = config._csv_beg * [""]
            config._csv_trailer = (table_len - config._csv_end) * [""]

        return default_headers + headers

    def on_message_received(self, msg: Message) -> None:
        for name, decoded, config in _matching(self.fields, self.log_config, msg):
            logger.debug("Decoded field:\n%s", decoded)
            defaults = [
                datetime.fromtimestamp(msg.timestamp),
                f"{msg.arbitration_id:X}",
                name,
                decoded.value,
                decoded.to_binary_string(),
            ]
            row = (
                defaults
                + config._csv_leader
                + decoded.to_csv(config.bits)
                + config._csv_trailer
            )
            self.csv_writer.writerow(row)
            self.csv_file.flush()

    def __call__(self, msg: Message) -> None:
        self.on_message_received(msg)

    def stop(self) -> None:
        if not self.csv_file.closed:
            self.csv_file.close()

    def on_error(self, exc: Exception) -> None:
        logger.error("BitFieldListener error: %s", exc)
