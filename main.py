#!/usr/bin/env python3
"""
Main entry point for the went IRC client
"""

from went.main import run

if __name__ == "__main__":
    run()
