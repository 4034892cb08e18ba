"""Flight Map zone data pipeline.

Loads, caches, validates and filters the geospatial zone layers (crown
land, exclusion zones, airports, controlled airspace, user POIs) that a
drone flight-planning map overlays on its tile surface, and provides the
geometry primitives those layers are built from.
"""

__version__ = "0.1.0"
