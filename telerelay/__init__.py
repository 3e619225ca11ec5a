"""Lookups, SMS and voice calls relayed to Twilio over a small HTTP API."""

__version__ = "0.1.0"
