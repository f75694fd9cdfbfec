"""Core components: entity store, relationship graph, search index and dataset loader."""
