"""HireTrack - job application tracking service."""
