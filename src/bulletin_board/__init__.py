"""Community bulletin board service."""
