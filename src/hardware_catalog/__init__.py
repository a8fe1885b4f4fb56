"""Hardware parts catalog: criteria search, optimistic updates, cascading deletes."""
