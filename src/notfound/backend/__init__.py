"""Backend services for the notfound application."""
