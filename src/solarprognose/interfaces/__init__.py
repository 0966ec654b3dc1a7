"""Provider implementation and its HTTP collaborator."""
