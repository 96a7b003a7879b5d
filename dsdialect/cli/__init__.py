"""Command line interface for dsdialect."""
