#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entry point for the Archon full local setup.

Runs Supabase and Archon entirely in Docker, detached. Equivalent to the
`archon-start` console script.
"""

from launcher.cli import main

if __name__ == "__main__":
    main()
