"""ObjectiveFS volume driver exceptions."""


class VolumeDriverError(Exception):
    """Base exception for volume driver errors."""

    message = "An unknown exception occurred."

    def __init__(self, message=None, **kwargs):
        """Initialize exception with optional custom message."""
        self.kwargs = kwargs
        if message:
            self.message = message
        super(VolumeDriverError, self).__init__(self.message % kwargs)


class VolumeNotFound(VolumeDriverError):
    """Volume is not registered."""

    message = "volume '%(name)s' not found"


class VolumeAlreadyExists(VolumeDriverError):
    """Volume name is already registered."""

    message = "volume '%(name)s' already exists"


class VolumeInUse(VolumeDriverError):
    """Volume still has attached callers."""

    message = "volume '%(name)s' currently in use (%(count)d unique)"

    @property
    def count(self) -> int:
        return self.kwargs["count"]


class InvalidVolumeName(VolumeDriverError):
    """Volume name cannot be used as a mountpoint component."""

    message = "invalid volume name '%(name)s': %(reason)s"


class MountFailed(VolumeDriverError):
    """The mount command failed.

    The message embeds the underlying error text and a hint pointing at the
    system logs, where mount.objectivefs reports the real cause.
    """

    message = "unexpected error mounting '%(name)s' check log (%(hint)s): %(details)s"

    def __init__(self, message=None, hint="/var/log/syslog or /var/log/messages", **kwargs):
        super(MountFailed, self).__init__(message, hint=hint, **kwargs)


class UnmountFailed(VolumeDriverError):
    """The unmount command failed; the volume is still mounted."""

    message = "failed to unmount '%(name)s': %(details)s"


class DirectoryError(VolumeDriverError):
    """Mountpoint directory could not be prepared."""

    message = "mountpoint directory error for '%(name)s': %(details)s"
