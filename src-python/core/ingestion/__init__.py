"""Input adapters: document text extraction and term-sheet ingestion."""
