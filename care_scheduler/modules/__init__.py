"""Feature modules of the care scheduler."""
