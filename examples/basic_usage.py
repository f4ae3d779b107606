#!/usr/bin/env python3
"""Basic usage example"""

import logging
from datetime import timedelta

from logwriter_module import MB, LogWriterBuilder


def main():
    # Create writer with builder pattern
    writer = (LogWriterBuilder("mywebserver")
        .with_paths("logs", "logs/arch")
        .with_max_size(100 * MB)
        .with_freeze_interval(timedelta(hours=1))
        .freeze_existing()
        .build())

    # Plug it into the standard logging front end
    handler = logging.StreamHandler(writer)
    handler.setFormatter(logging.Formatter("%(asctime)s mywebserver %(message)s"))
    log = logging.getLogger("mywebserver")
    log.addHandler(handler)
    log.setLevel(logging.INFO)

    log.info("Module started")

    log.removeHandler(handler)
    writer.close()


if __name__ == "__main__":
    main()
