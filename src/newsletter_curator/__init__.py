"""AI newsletter story curation: feeds in, ranked and merged stories out."""

__version__ = "0.1.0"
