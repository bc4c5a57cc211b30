"""Build a DNS query, send it over UDP or TCP, and decode and print the reply."""

__version__ = "0.1.0"