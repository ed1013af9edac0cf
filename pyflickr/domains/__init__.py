"""Domain logic: OAuth, request pipeline and endpoint table."""
