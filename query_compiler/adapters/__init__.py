"""Backend adapters: one filter translator per query language."""
