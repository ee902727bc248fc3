"""
Shared utilities package.

This package contains logging configuration and other shared utilities
used across the application.
"""

from cinerank.utils.logging_config import setup_logging, configure_api_logging

__all__ = ['setup_logging', 'configure_api_logging']
