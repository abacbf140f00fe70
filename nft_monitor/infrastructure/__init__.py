"""Infrastructure layer - AWS and chain adapters."""
