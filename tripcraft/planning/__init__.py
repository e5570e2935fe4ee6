"""Plan mutation and refinement engine."""
