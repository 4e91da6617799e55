"""Datasets, the packing runner and the ``container-pack`` CLI."""
