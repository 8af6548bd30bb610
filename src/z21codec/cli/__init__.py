"""Command line interface for z21codec (``z21codec decode|encode|commands``)."""
