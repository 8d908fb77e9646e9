"""Bundled world definitions (``worlds/*.yaml``) and map text (``maps/*.txt``)."""
