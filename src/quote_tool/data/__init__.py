"""Data subpackage - catalog source files and the catalog builder."""
