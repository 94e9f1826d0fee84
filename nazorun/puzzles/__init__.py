"""Bundled puzzles.

Each subdirectory is one puzzle package; see nazorun.catalog for the
constants a package must define.
"""
