"""Utility functions for deploy-resolver."""

from deploy_resolver.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
