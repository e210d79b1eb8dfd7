"""HTTP surface for the channel adapter and diagnostics."""
