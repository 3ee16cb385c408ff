"""
Ingestion — delimited-file reading, header mapping, and document assembly.

This package turns one delimited text file into an ordered
:class:`~csv_indexer.schema.models.DocumentBatch` ready for an index sink.
"""
