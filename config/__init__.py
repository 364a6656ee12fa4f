"""Configuration and data models for LMS Core."""
