"""Command line interface for horadofrango."""
