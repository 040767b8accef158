"""Configuration, logging, errors and the document store."""
