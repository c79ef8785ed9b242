"""freshbox command line interface."""
