"""Core configuration, logging and error types for the Customer Service."""
