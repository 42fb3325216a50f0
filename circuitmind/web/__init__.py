"""HTTP surface for the editor and the generation flow."""
