"""Graph algorithms: breadth-first traversal and max-flow / min-cut."""
