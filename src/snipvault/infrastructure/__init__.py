"""Infrastructure: local database, remote mirror, persistent store."""
