"""Core building blocks for the sftpadmin client."""
