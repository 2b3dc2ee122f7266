"""Web API package for resume-studio."""
