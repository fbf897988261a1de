"""IoT monitoring management API."""
