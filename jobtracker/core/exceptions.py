"""
Error taxonomy for the application store
"""


class StoreError(Exception):
    """Base class for persistence failures"""


class FetchError(StoreError):
    """Reading from the database failed"""


class SaveError(StoreError):
    """Writing to the database failed"""


class InvalidStatusError(ValueError):
    """A status string could not be parsed"""

    def __init__(self, status: str):
        super().__init__(f"Unrecognised application status: {status!r}")
        self.status = status
