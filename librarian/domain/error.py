"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


# ---------------------------------------------------------------------------
# Token identity
# ---------------------------------------------------------------------------


class TokenIdError(DomainError, ValueError):
    """Malformed invite token text."""

    pass


class InvalidTokenFormatError(TokenIdError):
    """Raised when unprefixed text is not a canonical UUID."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid token format: {text!r}")


class IncompleteTokenError(TokenIdError):
    """Raised when a prefixed token is cut short.

    Attributes:
        part_index: Index (0-4) of the first truncated 8-4-4-4-12 group
    """

    def __init__(self, part_index: int):
        self.part_index = part_index
        super().__init__(f"incomplete token value, group {part_index} is truncated")


class InvalidTokenValueError(TokenIdError):
    """Raised when the reassembled token is not valid hex."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"invalid token value: {text!r}")


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class StoreError(DomainError):
    """Underlying invite storage failure."""

    pass


class InviteConflictError(StoreError):
    """Raised when inserting a token that already exists."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invite already exists: {token}")


class UnknownInviteKindError(StoreError):
    """Raised when a stored row has an unknown platform discriminant."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown invite kind: {kind}")


class CorruptInvitePayloadError(StoreError):
    """Raised when a stored row does not match the schema for its kind."""

    def __init__(self, token: str, reason: str):
        self.token = token
        super().__init__(f"corrupt invite payload for {token}: {reason}")


# ---------------------------------------------------------------------------
# Invite lifecycle
# ---------------------------------------------------------------------------


class InviteNotFoundError(DomainError):
    """Raised when a token has no invite record."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invite not found: {token}")


class InviteExpiredError(DomainError):
    """Raised when an invite is past its expiry and has been purged."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"invite expired: {token}")


class ExpiredInviteCleanupError(StoreError):
    """Raised when purging an expired invite fails."""

    def __init__(self, token: str, cause: Exception):
        self.token = token
        self.cause = cause
        super().__init__(f"failed to delete expired invite {token}: {cause}")


class WrongInviteKindError(DomainError):
    """Raised when credentials target a different platform than the invite."""

    def __init__(self, actual: str, expected: str):
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"wrong invite kind for user creation: {actual}, expected {expected}"
        )


class ClientUnavailableError(DomainError):
    """Raised when the invite's platform is not configured."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"client {platform} is unavailable for user creation")


class InvalidCredentialsError(DomainError):
    """Raised when redemption credentials fail validation.

    Attributes:
        violations: Field name mapped to every message reported for it
    """

    def __init__(self, violations: dict[str, list[str]]):
        self.violations = violations
        lines = [
            f"- {field}: {message}"
            for field, messages in violations.items()
            for message in messages
        ]
        super().__init__("Invalid request:\n" + "\n".join(lines))


# ---------------------------------------------------------------------------
# Remote platforms
# ---------------------------------------------------------------------------


class RemotePlatformError(DomainError):
    """Base error raised by remote platform clients.

    Attributes:
        platform: Platform kind that produced the error
    """

    def __init__(self, platform: str, message: str):
        self.platform = platform
        super().__init__(f"[{platform}] {message}")


class RemoteConnectionError(RemotePlatformError):
    """Raised when the remote server cannot be reached."""

    def __init__(self, platform: str, cause: Exception):
        self.cause = cause
        super().__init__(platform, f"failed to connect: {cause}")


class RemoteResponseError(RemotePlatformError):
    """Raised when a remote response cannot be parsed."""

    def __init__(self, platform: str, reason: str):
        super().__init__(platform, f"failed to parse response: {reason}")


class RemoteServiceError(RemotePlatformError):
    """Raised when the remote server returns a structured error."""

    def __init__(self, platform: str, status_code: int, error: str, message: str):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(platform, f"{error}: {message}")


class RemoteViolationError(RemotePlatformError):
    """Raised when the remote server rejects fields of a request.

    Attributes:
        violations: (field name, message) pairs reported by the server
    """

    def __init__(self, platform: str, violations: list[tuple[str, str]]):
        self.violations = violations
        details = "; ".join(f"{field}: {message}" for field, message in violations)
        super().__init__(platform, f"violation error: {details}")


class RestrictionApplicationError(RemotePlatformError):
    """Raised when restrictions could not be applied to a remote user."""

    def __init__(self, platform: str, status_code: int):
        self.status_code = status_code
        super().__init__(
            platform, f"failed to apply user restriction (status {status_code})"
        )


class RemoteAuthenticationError(RemotePlatformError):
    """Raised when the client cannot authenticate against the remote server."""

    def __init__(self, platform: str, reason: str):
        super().__init__(platform, f"authentication failed: {reason}")
