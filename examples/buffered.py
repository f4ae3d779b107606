#!/usr/bin/env python3
"""Buffered writing example"""

import time

from logwriter_module import MB, LogWriter, RunningMode, SinkConfig


def main():
    config = SinkConfig(
        mode=RunningMode.PRODUCTION,
        buffer_size=2 * MB,
        hot_max_size=10 * MB,
    )
    writer = LogWriter("test", config, freeze_existing=True)

    record = b"R" * 256 + b"\n"
    print("Started")
    start = time.perf_counter()
    for _ in range(1000000):
        writer.write(record)

    writer.close()

    print(f"Duration: {time.perf_counter() - start:.3f}s")
    print(writer.get_stats().to_dict())


if __name__ == "__main__":
    main()
