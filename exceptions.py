"""Domain and storage exception hierarchy for the Customer Service."""


class CustomerError(Exception):
    """Base exception for all customer domain errors."""


class CustomerNotFoundError(CustomerError):
    """Raised when no customer matches an id or identification."""


class CustomerAlreadyExistsError(CustomerError):
    """Raised when creating a customer whose identification is taken."""


class CustomerInactiveError(CustomerError):
    """Raised when an operation requires an active customer."""


class InvalidCustomerDataError(CustomerError):
    """Raised when customer data violates a field constraint."""


class CustomerAuthenticationError(CustomerError):
    """Raised when a customer credential does not match."""


class StorageError(Exception):
    """Base exception for persistence-layer failures."""


class DuplicateIdentificationError(StorageError):
    """Raised when the persons unique constraint on identification is violated."""

    def __init__(self, identification: str):
        super().__init__(f"Identification {identification} is already registered")
        self.identification = identification
