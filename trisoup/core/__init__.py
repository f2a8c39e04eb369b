"""Implementation package for trisoup; import the public names from ``trisoup``."""
