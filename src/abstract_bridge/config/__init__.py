"""Configuration — settings loading, executable discovery, logging setup."""
