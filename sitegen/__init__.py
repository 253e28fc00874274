"""sitegen -- batch-generate one front-end project per business record."""

__version__ = "0.1.0"
