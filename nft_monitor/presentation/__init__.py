"""Presentation layer - Lambda entry points."""
