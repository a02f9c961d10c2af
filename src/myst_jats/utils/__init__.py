#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/myst_jats/utils/__init__.py
"""Utility helpers shared by the API and the command line."""
