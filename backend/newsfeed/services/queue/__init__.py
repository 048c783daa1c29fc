from .exceptions import JobQueueError, QueueStateError
from .models import Job, JobOutcome, JobResult
from .service import JobQueueService

__all__ = [
    'Job',
    'JobOutcome',
    'JobQueueError',
    'JobQueueService',
    'JobResult',
    'QueueStateError',
]
