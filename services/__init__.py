"""Service layer for LMS Core."""
