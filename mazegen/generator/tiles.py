# Raster characters used by GenerationResult.to_ascii
EMPTY = "."
ROOM = "R"
CORRIDOR = "T"
DOOR = "D"

__all__ = ["EMPTY", "ROOM", "CORRIDOR", "DOOR"]
