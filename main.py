#!/usr/bin/env python3
"""
Image to ASCII Art Converter
============================
Command line entry point; see ``asciigrid.cli`` for the options.
"""

from asciigrid.cli import main


if __name__ == '__main__':
    raise SystemExit(main())
