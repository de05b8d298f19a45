"""User interfaces built on top of the fontsmith library."""
