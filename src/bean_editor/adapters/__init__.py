"""Host adapters for embedding the editor session in UI toolkits."""
