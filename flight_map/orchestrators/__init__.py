"""Pipeline orchestration at the collaborator boundary.

- layers: layer toggle state, per-layer fetch + filter composition,
  hand-off to the rendering surface
- location: device location requests and zone lookup at a position
"""
