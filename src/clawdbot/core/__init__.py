"""Core configuration for the clawdbot CLI."""
