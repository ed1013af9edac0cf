"""Static endpoint table and the helpers built on it."""
