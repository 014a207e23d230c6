"""Adapters connecting the monitor to recorders, HTTP clients and frameworks."""
