"""Learning context infrastructure: persistence and HTTP API."""
