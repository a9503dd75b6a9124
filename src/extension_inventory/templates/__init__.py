"""HTML report templates."""
