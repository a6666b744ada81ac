"""Domain layer: rows, tables and the operators that combine them."""
