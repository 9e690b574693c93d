"""Note store interface and records."""

from ._memory import InMemoryRecordStore
from ._models import MAX_PRIORITY, Note, Paragraph, get_task_priority
from ._protocol import RecordStore

__all__ = [
    "MAX_PRIORITY",
    "InMemoryRecordStore",
    "Note",
    "Paragraph",
    "RecordStore",
    "get_task_priority",
]
