"""Output renderers for annotated replacement results."""
