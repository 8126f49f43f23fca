from sqlalchemy import MetaData
import enum

metadata = MetaData()


# ============================================================================
# ENUMS
# ============================================================================

class RunStatus(str, enum.Enum):
    """Ingestion run outcome"""
    SUCCESS = "success"
    CANCELLED = "cancelled"
    STALE_CHECKPOINT = "stale_checkpoint"
