class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials do not match. Never says which part was wrong."""


class DuplicateTaxIdError(DomainError):
    """Raised when a CNPJ/CPF is already registered."""


class IdentityError(DomainError):
    """Raised by the managed identity store."""


class SignupUnavailableError(IdentityError):
    """Raised when managed sign-up is disabled or cannot complete."""


class InvalidCredentialsError(IdentityError):
    """Raised when a managed identity rejects an e-mail/password pair."""
