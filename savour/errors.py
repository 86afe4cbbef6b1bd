class SavourError(Exception):
    """Base class for errors surfaced to the admin as a message."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class AdminProvisioningError(SavourError):
    pass


class StorageError(SavourError):
    pass
