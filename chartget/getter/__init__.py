"""Getter — the generic "fetch a chart by URL" interface."""
