"""Core domain values, ports and use cases."""
