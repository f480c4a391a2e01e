"""Pay-per-reveal HTTP API."""
