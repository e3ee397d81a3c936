"""Core domain layer: persistence, domain rules, logging and monitoring."""
