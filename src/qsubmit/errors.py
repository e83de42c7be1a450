"""Exceptions raised by qsubmit. The CLI turns them into exit status 1."""


class QsubmitError(Exception):
    """Base class for all qsubmit errors."""


class ConfigError(QsubmitError):
    """Invalid or unreadable configuration."""


class ValidationError(QsubmitError, ValueError):
    """A requested option violates the partition's limits or format."""


class QueueNotFoundError(ValidationError):
    pass


class NodeCountError(ValidationError):
    pass


class WalltimeFormatError(ValidationError):
    pass


class WalltimeRangeError(ValidationError):
    pass


class StagingError(QsubmitError):
    """A file needed in the work directory is missing."""


class SchedulerError(QsubmitError):
    """A Slurm command failed. The message is the command's own output."""


class SubmissionError(SchedulerError):
    pass
