"""Components of a pyrun run.

Each component is described by a protocol in [`protocols`][pyrun.components.protocols] \
and built from the settings by [`factory`][pyrun.components.factory].
"""
