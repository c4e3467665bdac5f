"""
Node placement and layout engine for the idea board canvas.

The package decides where cards go when they are created, branched,
duplicated, resized or shared into another board:

1. A masonry packer (the default board mode)
2. A free-flow placer that never moves existing cards
3. A cross-board positioner for duplicates and shares
4. A render-shell stabilizer that keeps renderer-facing objects identity-stable
"""

__version__ = "0.1.0"
