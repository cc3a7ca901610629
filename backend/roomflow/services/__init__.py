"""Domain services for the room phase workflow."""
