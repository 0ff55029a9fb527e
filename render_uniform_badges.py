#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render a uniform badge arrangement to PDF/PNG.
"""

# local repo modules
import uniform_badges.cli


if __name__ == "__main__":
	uniform_badges.cli.main()
