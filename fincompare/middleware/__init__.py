"""Tool-call middleware."""
