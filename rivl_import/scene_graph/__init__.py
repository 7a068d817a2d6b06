"""Scene graph nodes, node table and traversal."""
