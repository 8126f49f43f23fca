"""
Resumable CSV ingestion into the document store.

Modules:
    runner: IngestionRunner orchestrating one run
    resume: ResumeFilter skipping rows committed by earlier runs
    batcher: Fixed-size, order-preserving batching
    checkpoint: File-backed checkpoint of the last committed key
    cancellation: Cooperative cancellation from SIGINT/SIGTERM
    progress: Throughput logging
    entrypoint: Command-line wiring and exit codes

Subpackages:
    extractors: CSVRecordSource streaming rows in file order
    transformers: LocationMapper turning rows into documents
    loaders: DocumentLoader bulk-inserting batches

Architecture:
    CSVRecordSource -> ResumeFilter -> LocationMapper -> Batcher
    -> DocumentLoader -> FileCheckpointStore

    The checkpoint only advances after a batch commits, so a failed or
    interrupted run is safe to re-run (at-least-once delivery).

Usage:
    from ingestion.runner import IngestionRunner
    from ingestion.extractors import CSVRecordSource
    from ingestion.loaders import DocumentLoader
    from ingestion.checkpoint import FileCheckpointStore, checkpoint_path_for

Example:
    runner = IngestionRunner(
        source=CSVRecordSource("data/places.csv"),
        loader=DocumentLoader(engine, "places"),
        checkpoint_store=FileCheckpointStore(checkpoint_path_for("data/places.csv")),
    )
    result = await runner.run()

    print(f"Loaded {result['records_loaded']} records")

Error Handling:
    All components raise exceptions from core.exceptions; the entrypoint
    maps them to exit codes (1 for failures, 130 for interrupts).
"""

__all__ = [
    "IngestionRunner",
    "CSVRecordSource",
    "LocationMapper",
    "DocumentLoader",
    "FileCheckpointStore",
    "CancellationToken",
]
