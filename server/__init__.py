"""HTTP server for recordstore."""
