"""Core models and errors shared by the layout, output and document layers."""
