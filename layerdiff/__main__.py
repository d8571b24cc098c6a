# Copyright Red Hat
#
# layerdiff/__main__.py - Module layer differ entry point
#
# This file is part of the layerdiff project.
#
# SPDX-License-Identifier: Apache-2.0
import sys

from layerdiff.command import main


def run():
    """Console script entry point."""
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    run()
