"""HTTP API for the bulletin board."""
