"""Protocol interfaces for external collaborators."""
