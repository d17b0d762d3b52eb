#!/usr/bin/env python3

"""
Render fold-over name badges from a template and field records.
"""

# local repo modules
import foldover_badge.cli


if __name__ == "__main__":
	foldover_badge.cli.main()
