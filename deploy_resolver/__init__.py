"""Resolve the Vercel deployment of a commit and wait until it is ready."""

__version__ = "0.1.0"
