"""Static configuration for the recommendation core."""
