"""sftpadmin command line interface."""
