"""Core building blocks: config, logging, exceptions and protocols."""
