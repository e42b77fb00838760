"""
Purpose: Construction-time constants for the hex playfield and its walkability grid.
Dependencies: None.
Ext Hooks: Per-map overrides (pass keyword arguments to Pathfinder instead of editing these).
Client/Server: Shared; terrain generation must use the same HEX_RADIUS.
"""

HEX_RADIUS = 200          # Center to vertex, world units; must match the terrain mesh
HEX_ROTATION = -30.0      # Degrees; vertex 0 sits at -30 for a flat-sided x axis
GRID_SIZE = 400           # Cells per axis, covers -200..+200 at CELL_SIZE 1
CELL_SIZE = 1.0           # World units per cell
CLAMP_INSET = 0.5         # Nudge toward center after projecting onto an edge
COLLINEAR_DOT = 0.999     # Dot above this drops a waypoint (~2.56 degree turn)
SERVER_URL = "http://localhost:5000"
LOG_LEVEL = "INFO"
