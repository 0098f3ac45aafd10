"""Pathfinder simples API: read-only map/system lookups over HTTP."""
