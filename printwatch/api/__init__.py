"""HTTP service for printing and printer status."""
