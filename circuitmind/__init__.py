"""CircuitMind core — module catalog, topology validation, and
normalization of model-authored design solutions."""
