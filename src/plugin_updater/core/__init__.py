"""Core services: repositories, downloads, verification."""
