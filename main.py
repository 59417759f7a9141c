#!/usr/bin/env python3
"""
pocketrocket - Main entry point.

Runs the bootstrap wizard.
"""

from pocketrocket.app import main


if __name__ == "__main__":
    main()
