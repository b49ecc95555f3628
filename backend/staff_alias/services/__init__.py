"""Domain services for staff alias posting."""
