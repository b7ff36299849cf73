"""Services package for graph operations and report rendering."""
