"""Generic shared utilities (logging)."""
