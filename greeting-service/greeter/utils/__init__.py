"""Utility functions and helpers.

This module contains:
- log_config: process-wide logging setup (stdout/stderr split)
"""
