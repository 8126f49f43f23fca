from ingestion.extractors.csv_extractor import CSVRecordSource, RawRecord

__all__ = ["CSVRecordSource", "RawRecord"]
