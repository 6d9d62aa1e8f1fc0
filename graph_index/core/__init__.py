"""Configuration and backend connections."""
