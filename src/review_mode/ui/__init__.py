"""Qt integration for Review Mode."""
