"""API routes for HueForge."""
