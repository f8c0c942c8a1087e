"""Domain layer: protocol-independent sync logic and port interfaces."""
