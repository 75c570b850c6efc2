"""Receipt rendering and export."""
