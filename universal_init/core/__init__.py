"""Scaffolding phases: selection, initialization, materialization, manifests."""
