"""Workflow drivers.

- license_pipeline: poll → parse → render → persist for one order
"""
