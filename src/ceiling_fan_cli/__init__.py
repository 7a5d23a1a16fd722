#!/usr/bin/env python3
"""A CLI for the rfraw_tx library (and a ceiling fan's remote)."""
