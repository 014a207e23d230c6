"""Core domain: events, classification, audit strategies and the monitor."""
