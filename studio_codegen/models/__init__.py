"""Document, component and render request models."""
