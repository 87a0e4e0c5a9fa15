"""Configuration for tcx-codec."""
