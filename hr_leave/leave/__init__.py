"""Leave module — balance engine, sources, schemas and router."""
