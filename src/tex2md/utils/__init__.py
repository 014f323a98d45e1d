#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/utils/__init__.py
"""Utility helpers for tex2md."""
