"""Extension Inventory - Chromium profile extension lister and store liveness checker."""

__version__ = "0.3.0"
