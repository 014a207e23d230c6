"""Test suite for callmonitor."""
