"""Core statize functionality."""
