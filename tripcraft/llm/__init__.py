"""Oracle access: clients, prompts, schemas and the memoizing gateway."""
