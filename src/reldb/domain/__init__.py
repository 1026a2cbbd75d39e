"""Domain layer - tables, rows, values, constraints and the catalog."""
