"""Constants and schema definitions for secondary-vertex features."""
