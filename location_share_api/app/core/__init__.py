"""Configuration, logging, errors and database access shared by the app."""
