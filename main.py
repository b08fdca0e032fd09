#!/usr/bin/env python3
"""
Main script for running the course demonstrations.
"""

# Overview:
# 1) coverage: draw repeated samples from a known normal population, build
#    normal and t intervals for each, and report how often they cover the
#    true mean.
# 2) svd: build two nearly identical columns, center them, decompose, and
#    report variance explained per component.
# Both take --seed; the generator is created once and passed down.

import logging
import os
import sys
import time

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from lifestats.demos import main as demos_main


def main(argv=None):
    """Run the selected demonstration and log its duration."""
    start_time = time.time()
    status = demos_main(argv)
    logging.info("Demo finished in %.2f seconds", time.time() - start_time)
    return status


if __name__ == "__main__":
    sys.exit(main())
