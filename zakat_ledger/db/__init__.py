"""Database Base — declarative base shared by models and migrations."""
