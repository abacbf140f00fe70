"""Application layer - commands and queries."""
