"""Services for HueForge."""
