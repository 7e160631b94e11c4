from src.shift_stats.aggregation import CompletionAggregator
from src.shift_stats.classification import ShiftClassifier
from src.shift_stats.cleaning import RecordCleaner
from src.shift_stats.ingestion import IngestionError, ShiftApiIngester
from src.shift_stats.models import RankedEntry
from src.shift_stats.ranking import WorkerRanker

__all__ = [
    "CompletionAggregator",
    "IngestionError",
    "RankedEntry",
    "RecordCleaner",
    "ShiftApiIngester",
    "ShiftClassifier",
    "WorkerRanker",
]
