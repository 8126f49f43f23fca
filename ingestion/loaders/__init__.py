from ingestion.loaders.document_loader import DocumentLoader

__all__ = ["DocumentLoader"]
