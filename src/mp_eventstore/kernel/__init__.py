"""Kernel – errors, severity levels, and clocks shared by every layer."""
