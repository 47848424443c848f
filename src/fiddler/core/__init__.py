"""Fiddler core: manifest loading, graph construction, resolution and builds."""
