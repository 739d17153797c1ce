"""TypeScript workflow templates shipped as package data."""
