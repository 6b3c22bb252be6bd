"""Configuration, logging, environment and event helpers."""
