"""Strategy engine: lifecycle, configuration and the concrete strategies."""
