"""In-situ artwork preview: a wall, a floor, the artwork and a chair, drawn to scale."""
