"""HTTP routers: files and health."""
