"""Command-line helpers for working on Dreamizer prompts."""
