"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class BackendAPIError(DomainException):
    """Finance backend returned an error or is unavailable"""

    pass


class ObligationNotFoundError(DomainException):
    """Requested credit, mortgage or subscription does not exist for the user"""

    pass


class NotificationDeliveryError(DomainException):
    """Reminder webhook could not be delivered after all retries"""

    pass
