"""JSON export of curation results and the command-line entry point."""

__all__ = ["curation_exporter", "export_manager"]
