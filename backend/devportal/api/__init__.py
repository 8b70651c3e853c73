"""HTTP API of DevPortal."""
