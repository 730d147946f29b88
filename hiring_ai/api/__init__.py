"""HTTP API for the hiring AI processing core."""
