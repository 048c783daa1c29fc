class JobQueueError(Exception):
    """Job queue base exception"""
    pass

class QueueStateError(JobQueueError):
    """Queue is not in the state required by the operation"""
    pass
