"""Rendering subpackage.

Turns reward images into animated tiles. The renderer focuses on:

* A randomized chunk-by-chunk reveal painted one chunk per timer tick.
* A delayed, cancellable clear when a tile is switched off.
* A static silhouette backdrop beneath every tile surface.

See :mod:`reward_reveal.renderer.reveal` for the tile state machine driver.
"""
